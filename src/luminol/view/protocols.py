"""Boundary types describing what the engine needs from a host editor view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol, Sequence, Tuple

from luminol.buffer import Buffer, Selection


@dataclass(frozen=True, slots=True)
class DecorationStyle:
    """Visual attributes of one decoration layer."""

    color: Optional[str] = None
    background: Optional[str] = None
    opacity: Optional[float] = None
    overview_color: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SelectionChange:
    """Payload delivered to selection listeners."""

    selections: Tuple[Selection, ...]
    source: str = "user"


SelectionListener = Callable[[SelectionChange], None]


class EditorView(Protocol):
    """Protocol every host view implements for the engine."""

    @property
    def buffer(self) -> Buffer:
        ...

    @property
    def selections(self) -> Tuple[Selection, ...]:
        ...

    @property
    def primary_selection(self) -> Selection:
        ...

    def set_selections(
        self, selections: Iterable[Selection], *, source: str = "api"
    ) -> None:
        """Replace the selection set and notify selection listeners."""
        ...

    def is_visible(self, start: int, end: int) -> bool:
        ...

    def reveal_range(self, start: int, end: int) -> bool:
        """Scroll ``start..end`` into view if it is off-screen; report scrolling."""
        ...

    def set_decorations(
        self, layer: str, ranges: Sequence[Tuple[int, int]], style: DecorationStyle
    ) -> None:
        ...

    def remove_decorations(self, layer: str) -> None:
        ...

    def show_status(self, text: str) -> None:
        ...

    def hide_status(self) -> None:
        ...

    def on_selection_changed(self, listener: SelectionListener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unregisters it."""
        ...
