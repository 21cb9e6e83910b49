"""
Record Builder

Applies tokenizer events to the channel or programme under construction.
Dispatch is keyed on the tag name plus, where a tag is overloaded, the
record that is active or the parent tag.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
import re

from xmltv_stream.services.context_tracker import ContextTracker, OpenNode
from xmltv_stream.services.field_mappings import (
    CREDIT_FIELDS,
    IMAGE_FIELDS,
    LENGTH_UNITS,
    PROGRAMME_MULTI_FIELDS,
)
from xmltv_stream.services.record_types import (
    Channel,
    Credit,
    EpisodeNum,
    Programme,
    ProgrammeIcon,
    ProgrammeImage,
    Rating,
)
from xmltv_stream.services.token_types import NodeClose, NodeOpen, Text, Token
from xmltv_stream.utils.timestamps import TimestampResolver


logger = logging.getLogger(__name__)

_YEAR_RE = re.compile(r"\d{4}", re.ASCII)
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)", re.ASCII)
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)", re.ASCII)


class RecordBuilder:
    """Owns the active channel and programme for one parse.

    A channel and a programme may each be active independently; XMLTV never
    nests one inside another of the same kind.
    """

    def __init__(self, resolver: TimestampResolver | None = None) -> None:
        self.resolver = resolver or TimestampResolver()
        self.context = ContextTracker()
        self.channel: Channel | None = None
        self.programme: Programme | None = None

    def apply(self, token: Token) -> Channel | Programme | None:
        """Apply one token; returns a record when its closing tag completes it."""
        if isinstance(token, NodeOpen):
            self.handle_open(token.tag, token.attributes)
        elif isinstance(token, Text):
            self.handle_text(token.content)
        elif isinstance(token, NodeClose):
            return self.handle_close(token.tag)
        return None

    # Open tags

    def handle_open(self, tag: str, attributes: Mapping[str, str] | None = None) -> None:
        node = self.context.push(tag, attributes)
        handler = self._OPEN_HANDLERS.get(tag)
        if handler is not None:
            handler(self, node)

    def _open_channel(self, node: OpenNode) -> None:
        self.channel = Channel(name=node.attributes.get("id"))

    def _open_display_name(self, node: OpenNode) -> None:
        # Tentative value; text content overwrites it
        if self.channel is not None:
            self.channel.display_name = node.attributes.get("src")

    def _open_icon(self, node: OpenNode) -> None:
        attrs = node.attributes
        if self.programme is not None:
            self.programme.icon.append(ProgrammeIcon(
                src=attrs.get("src"),
                width=attrs.get("width") or None,
                height=attrs.get("height") or None,
            ))
        elif self.channel is not None:
            self.channel.icon = attrs.get("src")

    def _open_programme(self, node: OpenNode) -> None:
        attrs = node.attributes
        self.programme = Programme(
            channel=attrs.get("channel"),
            start=self.resolver.resolve(attrs.get("start")),
            # 'stop' is optional in XMLTV but nearly always present
            end=self.resolver.resolve(attrs.get("stop")),
        )

    _OPEN_HANDLERS: dict[str, Callable[[RecordBuilder, OpenNode], None]] = {
        "channel": _open_channel,
        "display-name": _open_display_name,
        "icon": _open_icon,
        "programme": _open_programme,
    }

    # Text

    def handle_text(self, content: str) -> None:
        node = self.context.current()
        if node is None:
            return

        if node.tag == "display-name" and self.channel is not None:
            self.channel.display_name = content
            return

        programme = self.programme
        if programme is None:
            return

        field_name = PROGRAMME_MULTI_FIELDS.get(node.tag)
        if field_name is not None:
            getattr(programme, field_name).append(content)
            return

        if node.tag in CREDIT_FIELDS:
            role = node.attributes.get("role") if node.tag == "actor" else None
            programme.credits.append(Credit(type=node.tag, role=role or None, name=content))

        image_size = IMAGE_FIELDS.get(node.tag)
        if image_size is not None:
            programme.images.append(ProgrammeImage(size=image_size, url=content))

        handler = self._PROGRAMME_TEXT_HANDLERS.get(node.tag)
        if handler is not None:
            handler(self, programme, node, content)

    def _text_length(self, programme: Programme, node: OpenNode, content: str) -> None:
        units = node.attributes.get("units")
        factor = LENGTH_UNITS.get(units) if units else None
        if factor is None:
            logger.debug("Ignoring length with unsupported units: %r", units)
            return
        if not _NUMBER_RE.fullmatch(content):
            logger.debug("Ignoring non-numeric length: %r", content)
            return
        programme.length = round(float(content) * factor)

    def _text_episode_num(self, programme: Programme, node: OpenNode, content: str) -> None:
        programme.episode_num.append(EpisodeNum(system=node.attributes.get("system"), value=content))

    def _text_date(self, programme: Programme, node: OpenNode, content: str) -> None:
        # Last well-formed value wins; malformed dates are ignored
        if not _YEAR_RE.search(content):
            return
        match = _LEADING_INT_RE.match(content)
        if match is not None:
            programme.date = int(match.group(1))

    def _text_value(self, programme: Programme, node: OpenNode, content: str) -> None:
        parent = node.parent
        if parent is not None and parent.tag == "rating":
            programme.rating.append(Rating(system=parent.attributes.get("system"), value=content))

    _PROGRAMME_TEXT_HANDLERS: dict[str, Callable[[RecordBuilder, Programme, OpenNode, str], None]] = {
        "length": _text_length,
        "episode-num": _text_episode_num,
        "date": _text_date,
        "value": _text_value,
    }

    # Close tags

    def handle_close(self, tag: str) -> Channel | Programme | None:
        completed: Channel | Programme | None = None

        if tag == "programme":
            completed, self.programme = self.programme, None
        elif tag == "channel":
            completed, self.channel = self.channel, None

        self.context.pop()
        return completed
