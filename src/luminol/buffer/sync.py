"""Adapter boundary types for handing buffer and view state to hosts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .state import Cursor, Selection


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot of the text, selections and rendered layers."""

    text: str
    selections: Tuple[Selection, ...]
    decorations: Dict[str, Tuple[Tuple[int, int], ...]] = field(default_factory=dict)
    status: Optional[str] = None


class BufferValidationError(RuntimeError):
    """Raised when an offset or cursor falls outside the buffer."""

    def __init__(
        self,
        message: str,
        *,
        cursor: Cursor | None = None,
        offset: int | None = None,
    ) -> None:
        super().__init__(message)
        self.cursor = cursor
        self.offset = offset
