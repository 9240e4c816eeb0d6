"""Session record describing "highlighting is on, for this text"."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from luminol.buffer import Buffer, Selection
from luminol.config import HighlightConfig

from .navigation import NavigationState
from .scanner import MatchSet, Occurrence


@dataclass(slots=True)
class Session:
    pattern: str
    whole_word: bool
    matches: MatchSet
    navigation: NavigationState
    config: HighlightConfig
    restore_selection: Optional[Tuple[Selection, ...]] = None
    active: bool = field(init=False)

    def __post_init__(self) -> None:
        self.active = bool(self.matches)
        if not self.active:
            self.navigation.reset()

    @property
    def count(self) -> int:
        return len(self.matches)

    @property
    def cursor(self) -> Optional[int]:
        return self.navigation.cursor

    @property
    def current(self) -> Optional[Occurrence]:
        if self.cursor is None:
            return None
        return self.matches[self.cursor]

    def line_span(self, buffer: Buffer) -> int:
        """Lines from the first occurrence's start to the last one's end."""

        if not self.matches:
            return 0
        first_row = buffer.position_at(self.matches[0].start)[0]
        last_row = buffer.position_at(self.matches[-1].end)[0]
        return last_row - first_row + 1

    def status_text(self, buffer: Buffer) -> str:
        if not self.matches:
            return "0 matches"
        return f"{self.count} matches, spanning {self.line_span(buffer)} lines"


__all__ = ["Session"]
