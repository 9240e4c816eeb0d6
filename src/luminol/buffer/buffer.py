"""Buffer façade: full text plus offset, line and word lookups."""

from __future__ import annotations

import re
from bisect import bisect_right
from typing import List, Optional, Tuple

from .document import BufferDocument
from .state import Cursor
from .validation import ensure_cursor, ensure_offset

OffsetRange = Tuple[int, int]

WORD_PATTERN = re.compile(r"\w+")


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
    ) -> None:
        self.name = name
        self._set_document(document or BufferDocument())

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    def _set_document(self, document: BufferDocument) -> None:
        self.document = document
        self._text = "\n".join(document.snapshot())
        self._line_starts = _line_starts(document)

    @property
    def text(self) -> str:
        return self._text

    @property
    def line_count(self) -> int:
        return self.document.line_count

    def __len__(self) -> int:
        return len(self._text)

    def get_line(self, row: int) -> str:
        return self.document.get_line(row)

    def get_text(self, start: int, end: int) -> str:
        start = ensure_offset(len(self._text), start)
        end = ensure_offset(len(self._text), end)
        if start > end:
            start, end = end, start
        return self._text[start:end]

    def position_at(self, offset: int) -> Cursor:
        """Map an absolute offset to ``(row, column)``."""

        ensure_offset(len(self._text), offset)
        row = bisect_right(self._line_starts, offset) - 1
        return (row, offset - self._line_starts[row])

    def offset_at(self, cursor: Cursor) -> int:
        """Map ``(row, column)`` back to an absolute offset."""

        row, col = ensure_cursor(self.document, cursor)
        return self._line_starts[row] + col

    def line_span(self, row: int) -> OffsetRange:
        """Offsets covering line ``row`` without its line break."""

        ensure_cursor(self.document, (row, 0))
        start = self._line_starts[row]
        return (start, start + len(self.document.get_line(row)))

    def word_range_at(self, offset: int) -> Optional[OffsetRange]:
        """Return the word touching ``offset``, or ``None`` between words.

        A caret sitting just after the last character of a word still
        resolves to that word.
        """

        ensure_offset(len(self._text), offset)
        row, col = self.position_at(offset)
        line = self.document.get_line(row)
        for match in WORD_PATTERN.finditer(line):
            if match.start() <= col <= match.end():
                base = self._line_starts[row]
                return (base + match.start(), base + match.end())
            if match.start() > col:
                break
        return None


def _line_starts(document: BufferDocument) -> List[int]:
    starts: List[int] = []
    running = 0
    for line in document.snapshot():
        starts.append(running)
        running += len(line) + 1  # newline
    return starts
