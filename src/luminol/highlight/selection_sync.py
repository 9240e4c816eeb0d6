"""Coupling between the editor selection and the active match set."""

from __future__ import annotations

from typing import Iterable, Tuple

from luminol.buffer import Selection
from luminol.runtime import telemetry
from luminol.view import EditorView

from .scanner import MatchSet, Occurrence


class SuppressionFlag:
    """One-shot marker for the selection change the engine is about to cause."""

    __slots__ = ("_armed",)

    def __init__(self) -> None:
        self._armed = False

    @property
    def armed(self) -> bool:
        return self._armed

    def arm(self) -> None:
        self._armed = True

    def consume(self) -> bool:
        """Disarm and report whether the flag was armed."""

        was_armed = self._armed
        self._armed = False
        return was_armed


class SelectionSync:
    """Applies engine-driven selections and classifies incoming changes."""

    def __init__(self, view: EditorView) -> None:
        self.view = view
        self.flag = SuppressionFlag()
        self.logger = telemetry.get_logger("luminol.highlight.selection")

    def _apply(self, selections: Iterable[Selection]) -> None:
        # The view notifies synchronously, so the flag must be up first.
        self.flag.arm()
        self.view.set_selections(tuple(selections), source="engine")

    def select_all(self, matches: MatchSet) -> int:
        """Select every occurrence at once; returns the selection count."""

        if not matches:
            return 0
        self._apply(Selection(o.start, o.end) for o in matches)
        return len(matches)

    def select_one(self, occurrence: Occurrence) -> None:
        self._apply((Selection(occurrence.start, occurrence.end),))

    def restore(self, selections: Tuple[Selection, ...]) -> None:
        if selections:
            self._apply(selections)

    def on_selection_changed(self) -> bool:
        """Consume the flag; ``True`` means the change came from outside."""

        if self.flag.consume():
            self.logger.debug("selection::suppressed")
            return False
        return True


__all__ = ["SelectionSync", "SuppressionFlag"]
