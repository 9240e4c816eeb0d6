"""Textual host binding: the adapter is importable without starting an app."""

from .controller import TextualHighlightAdapter, TextualUIHooks, render_mirror

__all__ = ["TextualHighlightAdapter", "TextualUIHooks", "render_mirror"]
