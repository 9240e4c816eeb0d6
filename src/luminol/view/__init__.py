"""Editor view capability consumed by the highlighting engine."""

from .memory import MemoryEditorView, RenderedLayer
from .protocols import DecorationStyle, EditorView, SelectionChange, SelectionListener

__all__ = [
    "DecorationStyle",
    "EditorView",
    "MemoryEditorView",
    "RenderedLayer",
    "SelectionChange",
    "SelectionListener",
]
