"""Occurrence scanning over the full document text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Pattern, Tuple


@dataclass(frozen=True, slots=True, order=True)
class Occurrence:
    """One matched span ``[start, end)`` in document offsets."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end <= self.start:
            raise ValueError(f"Invalid occurrence span ({self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def contains(self, offset: int) -> bool:
        return self.start <= offset <= self.end

    def as_range(self) -> Tuple[int, int]:
        return (self.start, self.end)


MatchSet = Tuple[Occurrence, ...]


@dataclass(frozen=True, slots=True)
class ScanResult:
    matches: MatchSet
    cursor: Optional[int]

    @property
    def count(self) -> int:
        return len(self.matches)


def scan_occurrences(
    text: str,
    pattern: Pattern[str],
    caret: Optional[int] = None,
    selected: Optional[Tuple[int, int]] = None,
) -> ScanResult:
    """Collect every non-overlapping match of ``pattern`` in document order.

    The occurrence equal to ``selected`` seeds the cursor. Failing that, the
    first occurrence containing ``caret`` does; otherwise the cursor is
    ``None``.
    """

    matches = []
    exact: Optional[int] = None
    touching: Optional[int] = None
    for match in pattern.finditer(text):
        if match.end() == match.start():
            continue
        occurrence = Occurrence(match.start(), match.end())
        if exact is None and selected is not None and occurrence.as_range() == selected:
            exact = len(matches)
        if touching is None and caret is not None and occurrence.contains(caret):
            touching = len(matches)
        matches.append(occurrence)
    cursor = exact if exact is not None else touching
    return ScanResult(matches=tuple(matches), cursor=cursor)


__all__ = ["MatchSet", "Occurrence", "ScanResult", "scan_occurrences"]
