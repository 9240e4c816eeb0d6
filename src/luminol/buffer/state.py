"""Cursor and selection value types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cursor = Tuple[int, int]  # (row, column)


@dataclass(frozen=True, slots=True)
class Selection:
    """Offset-based selection; ``active`` is where the caret sits."""

    anchor: int
    active: int

    @classmethod
    def caret(cls, offset: int) -> "Selection":
        return cls(offset, offset)

    @property
    def start(self) -> int:
        return min(self.anchor, self.active)

    @property
    def end(self) -> int:
        return max(self.anchor, self.active)

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.active

    def as_range(self) -> Tuple[int, int]:
        return (self.start, self.end)
