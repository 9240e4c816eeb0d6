"""Line-oriented document storage backing a Buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence


@dataclass(slots=True)
class BufferDocument:
    """Text stored as a list of lines split on ``"\\n"``.

    Splitting only on line feeds keeps ``"\\n".join(lines)`` identical to the
    source text, so character offsets survive the round trip.
    """

    _lines: List[str] = field(default_factory=lambda: [""])

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(_lines=text.split("\n"))

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]
