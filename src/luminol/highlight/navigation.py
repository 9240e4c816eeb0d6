"""Cyclic cursor over the occurrences of the active session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class NavigationState:
    count: int = 0
    cursor: Optional[int] = None

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError("count cannot be negative")
        if self.cursor is not None and not 0 <= self.cursor < self.count:
            raise ValueError(f"cursor {self.cursor} outside 0..{self.count - 1}")

    @property
    def can_move(self) -> bool:
        return self.count > 1

    def next_index(self) -> Optional[int]:
        if self.count == 0:
            return None
        current = -1 if self.cursor is None else self.cursor
        return (current + 1) % self.count

    def prev_index(self) -> Optional[int]:
        if self.count == 0:
            return None
        if self.cursor is None or self.cursor <= 0:
            return self.count - 1
        return self.cursor - 1

    def advance(self) -> Optional[int]:
        """Move forward one occurrence, wrapping; returns the new cursor."""

        if self.can_move:
            self.cursor = self.next_index()
        return self.cursor

    def retreat(self) -> Optional[int]:
        """Move back one occurrence, wrapping; returns the new cursor."""

        if self.can_move:
            self.cursor = self.prev_index()
        return self.cursor

    def reset(self) -> None:
        self.count = 0
        self.cursor = None


__all__ = ["NavigationState"]
