"""
Events surfaced by the streaming parser, in closing-tag order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal

from xmltv_stream.services.record_types import Channel, Programme


@dataclass(frozen=True, slots=True)
class ChannelEvent:
    kind: ClassVar[Literal["channel"]] = "channel"
    channel: Channel


@dataclass(frozen=True, slots=True)
class ProgrammeEvent:
    kind: ClassVar[Literal["programme"]] = "programme"
    programme: Programme


@dataclass(frozen=True, slots=True)
class EndEvent:
    kind: ClassVar[Literal["end"]] = "end"


@dataclass(frozen=True, slots=True)
class ErrorEvent:
    """Fatal tokenizer fault; nothing is emitted after it."""
    kind: ClassVar[Literal["error"]] = "error"
    cause: Exception


ParseEvent = ChannelEvent | ProgrammeEvent | EndEvent | ErrorEvent


__all__ = ["ChannelEvent", "ProgrammeEvent", "EndEvent", "ErrorEvent", "ParseEvent"]
