"""
Tag ancestry tracking for the streaming parser.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(slots=True)
class OpenNode:
    """A currently open tag with a link to its parent."""
    tag: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    parent: OpenNode | None = None


class ContextTracker:
    """Stack of open tags; only the top and its parent are ever inspected."""

    def __init__(self) -> None:
        self._top: OpenNode | None = None
        self._depth = 0

    def push(self, tag: str, attributes: Mapping[str, str] | None = None) -> OpenNode:
        self._top = OpenNode(tag, attributes or {}, self._top)
        self._depth += 1
        return self._top

    def pop(self) -> OpenNode | None:
        """Remove the current tag. Popping an empty stack is a no-op."""
        node = self._top
        if node is not None:
            self._top = node.parent
            self._depth -= 1
        return node

    def current(self) -> OpenNode | None:
        return self._top

    def parent(self) -> OpenNode | None:
        return self._top.parent if self._top is not None else None

    def __len__(self) -> int:
        return self._depth
