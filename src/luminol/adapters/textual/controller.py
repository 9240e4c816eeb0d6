"""Textual-facing adapter wiring the engine, commands and caret keys to UI hooks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from rich.text import Text

from luminol.buffer import BufferMirror
from luminol.commands import CommandRegistry
from luminol.highlight import (
    DIM_LAYER,
    HIGHLIGHT_LAYER,
    OVERVIEW_LAYER,
    SOLE_LAYER,
    HighlightEngine,
)
from luminol.view import DecorationStyle, MemoryEditorView

GUTTER_MARK = "▐ "
GUTTER_BLANK = "  "


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_document: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualHighlightAdapter:
    """Routes key presses to commands or caret moves and refreshes the UI."""

    def __init__(
        self,
        engine: HighlightEngine,
        registry: CommandRegistry,
        hooks: TextualUIHooks,
    ) -> None:
        if not isinstance(engine.view, MemoryEditorView):
            raise TypeError("TextualHighlightAdapter requires a MemoryEditorView")
        self.engine = engine
        self.view: MemoryEditorView = engine.view
        self.registry = registry
        self.hooks = hooks
        self._caret_moves: Dict[str, Callable[[int], int]] = {
            "left": self._offset_left,
            "right": self._offset_right,
            "up": lambda offset: self._offset_vertical(offset, -1),
            "down": lambda offset: self._offset_vertical(offset, 1),
            "home": self._offset_home,
            "end": self._offset_end,
        }
        self._subscribe_events()
        self._refresh()

    def flags(self) -> Dict[str, bool]:
        return {
            "highlight_active": self.engine.active,
            "has_selection": not self.view.primary_selection.is_empty,
        }

    def handle_textual_key(self, key: str) -> Optional[str]:
        """Dispatch a Textual key name; returns the command id or move name."""

        binding = self.registry.resolve(key, self.flags())
        if binding is not None:
            self._log_state("key ->", key=key, command=binding.command_id)
            self.registry.execute(binding.command_id, self.engine)
            self._refresh()
            return binding.command_id

        extend = key.startswith("shift+")
        name = key[len("shift+"):] if extend else key
        move = self._caret_moves.get(name)
        if move is None:
            self._log_state("key ->", key=key, handled=False)
            return None
        self._log_state("key ->", key=key, move=name, extend=extend)
        self.view.move_caret(move(self.view.caret), extend=extend)
        self._refresh()
        return name

    def run_command(self, command_id: str) -> None:
        self.registry.execute(command_id, self.engine)
        self._refresh()

    def set_viewport(self, visible_lines: Optional[int], first_line: int = 0) -> None:
        """Record how many rows the host shows and which one is on top."""

        self.view.visible_lines = visible_lines
        self.view.first_visible_line = max(0, first_line)

    def click(self, offset: int) -> None:
        """Place the caret as a mouse click would."""

        self.view.move_caret(offset)
        self._refresh()

    def render(self) -> Text:
        """Document text styled with the current decoration layers."""

        styles = {name: layer.style for name, layer in self.view.decorations.items()}
        return render_mirror(self.view.mirror(), styles)

    # --- caret movement ------------------------------------------------------
    def _offset_left(self, offset: int) -> int:
        return max(0, offset - 1)

    def _offset_right(self, offset: int) -> int:
        return min(len(self.view.buffer), offset + 1)

    def _offset_vertical(self, offset: int, delta: int) -> int:
        buffer = self.view.buffer
        row, col = buffer.position_at(offset)
        target = max(0, min(buffer.line_count - 1, row + delta))
        return buffer.offset_at((target, min(col, len(buffer.get_line(target)))))

    def _offset_home(self, offset: int) -> int:
        buffer = self.view.buffer
        return buffer.line_span(buffer.position_at(offset)[0])[0]

    def _offset_end(self, offset: int) -> int:
        buffer = self.view.buffer
        return buffer.line_span(buffer.position_at(offset)[0])[1]

    # --- events --------------------------------------------------------------
    def _subscribe_events(self) -> None:
        bus = self.engine.bus
        for event in (
            "highlight.start",
            "highlight.clear",
            "highlight.navigate",
            "highlight.select_all",
            "highlight.status",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "highlight.status":
            self.hooks.update_status(payload if isinstance(payload, str) else "")

    def _refresh(self) -> None:
        self.hooks.update_document(self.view.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "active": self.engine.active,
            "matches": len(self.engine.matches),
            "cursor": self.engine.cursor,
            "caret": self.view.caret,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


def _style_for(layer: str, style: DecorationStyle) -> str:
    if layer == DIM_LAYER:
        return style.color or "dim"
    if layer in {HIGHLIGHT_LAYER, SOLE_LAYER}:
        return f"bold {style.color}" if style.color else "bold"
    return ""


def render_mirror(
    mirror: BufferMirror, styles: Dict[str, DecorationStyle]
) -> Text:
    """Turn a mirror into a rich ``Text`` with an overview gutter."""

    text = Text(mirror.text)
    for layer, ranges in mirror.decorations.items():
        if layer == OVERVIEW_LAYER:
            continue
        style = _style_for(layer, styles.get(layer, DecorationStyle()))
        for start, end in ranges:
            if style and end > start:
                text.stylize(style, start, end)
    for selection in mirror.selections:
        if selection.is_empty:
            if selection.active < len(mirror.text):
                text.stylize("underline", selection.active, selection.active + 1)
        else:
            text.stylize("reverse", selection.start, selection.end)

    marked_rows = _overview_rows(mirror)
    lines = text.split("\n", allow_blank=True)
    gutter = [
        Text(GUTTER_MARK if row in marked_rows else GUTTER_BLANK, style="yellow")
        for row in range(len(lines))
    ]
    return Text("\n").join(Text.assemble(g, line) for g, line in zip(gutter, lines))


def _overview_rows(mirror: BufferMirror) -> set[int]:
    starts = [0]
    for index, char in enumerate(mirror.text):
        if char == "\n":
            starts.append(index + 1)
    rows: set[int] = set()
    for start, _end in mirror.decorations.get(OVERVIEW_LAYER, ()):
        rows.add(starts.index(start))
    return rows


__all__ = ["TextualHighlightAdapter", "TextualUIHooks", "render_mirror"]
