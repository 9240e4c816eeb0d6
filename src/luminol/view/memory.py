"""In-process editor view used by the Textual adapter and by tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

from luminol.buffer import Buffer, BufferMirror, Selection, ensure_offset
from luminol.runtime import EventBus, telemetry

from .protocols import DecorationStyle, SelectionChange, SelectionListener

_SELECTION_EVENT = "view.selection"


@dataclass(frozen=True, slots=True)
class RenderedLayer:
    ranges: Tuple[Tuple[int, int], ...]
    style: DecorationStyle


class MemoryEditorView:
    """Selections, viewport, decoration layers and status for one buffer.

    ``visible_lines=None`` means the whole document fits on screen. Every call
    to ``set_selections`` notifies listeners, even when the selection did not
    change, so a caller that primes a listener before mutating always gets
    exactly one notification back.
    """

    def __init__(
        self,
        buffer: Buffer,
        *,
        selections: Optional[Iterable[Selection]] = None,
        visible_lines: Optional[int] = None,
        first_visible_line: int = 0,
    ) -> None:
        self._buffer = buffer
        self._selections: Tuple[Selection, ...] = tuple(selections or ()) or (
            Selection.caret(0),
        )
        self.visible_lines = visible_lines
        self.first_visible_line = first_visible_line
        self._layers: Dict[str, RenderedLayer] = {}
        self._status: Optional[str] = None
        self._bus = EventBus()
        self.logger = telemetry.get_logger("luminol.view")

    @classmethod
    def from_text(cls, text: str, **kwargs: object) -> "MemoryEditorView":
        return cls(Buffer.from_text(text), **kwargs)  # type: ignore[arg-type]

    @property
    def buffer(self) -> Buffer:
        return self._buffer

    @property
    def selections(self) -> Tuple[Selection, ...]:
        return self._selections

    @property
    def primary_selection(self) -> Selection:
        return self._selections[0]

    @property
    def caret(self) -> int:
        return self.primary_selection.active

    def set_selections(
        self, selections: Iterable[Selection], *, source: str = "api"
    ) -> None:
        updated = tuple(selections)
        if not updated:
            raise ValueError("A view always holds at least one selection")
        length = len(self._buffer)
        for selection in updated:
            ensure_offset(length, selection.anchor)
            ensure_offset(length, selection.active)
        self._selections = updated
        self._bus.emit(_SELECTION_EVENT, SelectionChange(updated, source))

    def set_selection(self, selection: Selection, *, source: str = "api") -> None:
        self.set_selections((selection,), source=source)

    def move_caret(self, offset: int, *, extend: bool = False) -> None:
        """Caret movement as a user would perform it."""

        anchor = self.primary_selection.anchor if extend else offset
        self.set_selections((Selection(anchor, offset),), source="user")

    def on_selection_changed(self, listener: SelectionListener) -> Callable[[], None]:
        return self._bus.subscribe(_SELECTION_EVENT, listener)  # type: ignore[arg-type]

    # --- viewport ------------------------------------------------------------
    def _last_visible_line(self) -> int:
        if self.visible_lines is None:
            return self._buffer.line_count - 1
        return self.first_visible_line + self.visible_lines - 1

    def is_visible(self, start: int, end: int) -> bool:
        first_row = self._buffer.position_at(start)[0]
        last_row = self._buffer.position_at(end)[0]
        return (
            first_row >= self.first_visible_line
            and last_row <= self._last_visible_line()
        )

    def reveal_range(self, start: int, end: int) -> bool:
        if self.is_visible(start, end):
            return False
        visible = self.visible_lines
        if visible is None:
            visible = self._buffer.line_count
        row = self._buffer.position_at(start)[0]
        top = max(0, row - visible // 2)
        max_top = max(0, self._buffer.line_count - visible)
        self.first_visible_line = min(top, max_top)
        self.logger.debug(f"view::reveal row={row} top={self.first_visible_line}")
        return True

    # --- decorations ---------------------------------------------------------
    def set_decorations(
        self, layer: str, ranges: Sequence[Tuple[int, int]], style: DecorationStyle
    ) -> None:
        # Re-setting a layer moves it to the top of the paint order.
        self._layers.pop(layer, None)
        self._layers[layer] = RenderedLayer(tuple(ranges), style)

    def remove_decorations(self, layer: str) -> None:
        self._layers.pop(layer, None)

    @property
    def decorations(self) -> Dict[str, RenderedLayer]:
        """Rendered layers in paint order, bottom first."""

        return dict(self._layers)

    # --- status --------------------------------------------------------------
    def show_status(self, text: str) -> None:
        self._status = text

    def hide_status(self) -> None:
        self._status = None

    @property
    def status_text(self) -> Optional[str]:
        return self._status

    def mirror(self) -> BufferMirror:
        return BufferMirror(
            text=self._buffer.text,
            selections=self._selections,
            decorations={name: layer.ranges for name, layer in self._layers.items()},
            status=self._status,
        )
