"""Text buffer capability: storage plus offset/position mapping."""

from .buffer import Buffer, OffsetRange
from .document import BufferDocument
from .state import Cursor, Selection
from .sync import BufferMirror, BufferValidationError
from .validation import ensure_cursor, ensure_offset

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferMirror",
    "BufferValidationError",
    "Cursor",
    "OffsetRange",
    "Selection",
    "ensure_cursor",
    "ensure_offset",
]
