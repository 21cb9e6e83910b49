"""
Tokenizer events consumed by the record builder.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True, slots=True)
class NodeOpen:
    tag: str
    attributes: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Text:
    content: str


@dataclass(frozen=True, slots=True)
class NodeClose:
    tag: str


Token = NodeOpen | Text | NodeClose


class TokenSource(Protocol):
    """Accepts raw input chunks and delivers tokens to a sink in order."""

    def feed(self, chunk: str | bytes) -> None: ...

    def close(self) -> None: ...


class TokenizerError(ValueError):
    """Raised when the input is not well-formed XML"""
    pass


__all__ = ["NodeOpen", "Text", "NodeClose", "Token", "TokenSource", "TokenizerError"]
