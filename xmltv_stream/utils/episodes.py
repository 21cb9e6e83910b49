"""
Episode numbering helpers

Works on completed programmes, after the streaming pass.
"""
from collections.abc import Iterable
from typing import TYPE_CHECKING
import re

if TYPE_CHECKING:
    from xmltv_stream.services.record_types import EpisodeNum

XMLTV_NS_SYSTEM = "xmltv_ns"

_SEASON_RE = re.compile(r"[0-9]+")


def get_season(episode_nums: Iterable["EpisodeNum"], ep_num: str | None = None) -> int | None:
    """
    Return the one-indexed season number from xmltv_ns episode numbering

    The xmltv_ns format looks like: season[/total] . episode[/total] . part[/total]
    and counts from zero. So '1.4/5.' is episode 5 of 5 in season 2 and
    '0.0.0/2' is part 1 of episode 1 in season 1.

    Args:
        episode_nums: Programme episode-num entries, searched when ep_num is empty
        ep_num: Explicit xmltv_ns value to decode

    Returns:
        Season number, or None when unknown
    """
    if not ep_num:
        entry = next((item for item in episode_nums if item.system == XMLTV_NS_SYSTEM), None)
        if entry is None or entry.value is None:
            return None
        ep_num = entry.value

    parts = ep_num.split(".")
    if len(parts) != 3:
        return None

    season = parts[0].split("/")[0].strip()
    if not _SEASON_RE.fullmatch(season):
        return None

    return int(season) + 1
