"""
Records produced by the streaming XMLTV parser.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Literal

from xmltv_stream.utils.episodes import get_season


ImageSize = Literal["large", "medium", "small"]


@dataclass(slots=True)
class ProgrammeIcon:
    src: str | None
    width: str | None = None
    height: str | None = None


@dataclass(slots=True)
class Rating:
    system: str | None
    value: str


@dataclass(slots=True)
class EpisodeNum:
    system: str | None
    value: str


@dataclass(slots=True)
class Credit:
    type: str
    role: str | None
    name: str


@dataclass(slots=True)
class ProgrammeImage:
    size: ImageSize
    url: str


@dataclass(slots=True)
class Channel:
    """A single channel listing."""
    name: str | None = None
    display_name: str | None = None
    icon: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class Programme:
    """A single programme listing. List fields keep document order."""
    channel: str | None = None
    start: datetime | None = None
    end: datetime | None = None
    length: int | None = None
    icon: list[ProgrammeIcon] = field(default_factory=list)
    title: list[str] = field(default_factory=list)
    secondary_title: list[str] = field(default_factory=list)
    desc: list[str] = field(default_factory=list)
    descgen: list[str] = field(default_factory=list)
    category: list[str] = field(default_factory=list)
    country: list[str] = field(default_factory=list)
    rating: list[Rating] = field(default_factory=list)
    episode_num: list[EpisodeNum] = field(default_factory=list)
    credits: list[Credit] = field(default_factory=list)
    images: list[ProgrammeImage] = field(default_factory=list)
    date: int | None = None

    def get_season(self, ep_num: str | None = None) -> int | None:
        """Season number from xmltv_ns numbering, or None when unknown."""
        return get_season(self.episode_num, ep_num)

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload["start"] = self.start.isoformat() if self.start else None
        payload["end"] = self.end.isoformat() if self.end else None
        return payload


__all__ = [
    "Channel",
    "Credit",
    "EpisodeNum",
    "ImageSize",
    "Programme",
    "ProgrammeIcon",
    "ProgrammeImage",
    "Rating",
]
