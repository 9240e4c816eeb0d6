"""Highlight engine: the single owner of session state for one editor view."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from luminol.buffer import Selection
from luminol.config import ConfigSource, resolve_config
from luminol.runtime import EventBus, telemetry
from luminol.view import EditorView, SelectionChange

from . import events as ev
from .decorations import (
    EMPTY_DECORATIONS,
    DecorationState,
    apply_decorations,
    clear_decorations,
    render_decorations,
)
from .navigation import NavigationState
from .pattern import compile_pattern
from .scanner import MatchSet, scan_occurrences
from .selection_sync import SelectionSync
from .session import Session


class HighlightEngine:
    """Reactor turning commands and selection changes into session transitions.

    Every inbound event goes through ``apply``. The engine subscribes a single
    selection listener on construction; selection changes the engine causes
    itself are recognised through ``SelectionSync``'s suppression flag, any
    other change tears the session down.
    """

    def __init__(
        self,
        view: EditorView,
        *,
        config: Optional[ConfigSource] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.view = view
        self.bus = bus or EventBus()
        self.sync = SelectionSync(view)
        self.session: Optional[Session] = None
        self.logger = telemetry.get_logger("luminol.highlight")
        self._config_source = config
        self._handlers: Dict[str, Callable[[], None]] = {
            ev.TOGGLE: self._toggle,
            ev.HIGHLIGHT: self._highlight,
            ev.CLEAR: self._clear_command,
            ev.SELECT_ALL: self._select_all,
            ev.MOVE_NEXT: self._move_next,
            ev.MOVE_PREV: self._move_prev,
        }
        self._unsubscribe: Optional[Callable[[], None]] = view.on_selection_changed(
            self._on_view_selection
        )

    # --- state ---------------------------------------------------------------
    @property
    def active(self) -> bool:
        return self.session is not None and self.session.active

    @property
    def matches(self) -> MatchSet:
        return self.session.matches if self.session is not None else ()

    @property
    def cursor(self) -> Optional[int]:
        return self.session.cursor if self.session is not None else None

    @property
    def decorations(self) -> DecorationState:
        if self.session is None or not self.session.active:
            return EMPTY_DECORATIONS
        return render_decorations(
            self.session.matches, self.view.buffer, self.session.config
        )

    # --- entry points --------------------------------------------------------
    def apply(self, event: ev.EngineEvent) -> Optional[Session]:
        """Run one transition and return the resulting session, if any."""

        if isinstance(event, ev.CommandEvent):
            with telemetry.span(
                f"highlight::{event.name}",
                logger_name="luminol.highlight",
                component="highlight",
                metadata={"command": event.name, "active": self.active},
            ) as handle:
                self._handlers[event.name]()
                handle.add_metadata("matches", len(self.matches))
        elif isinstance(event, ev.SelectionChangedEvent):
            self._selection_changed(event)
        else:
            raise TypeError(f"Unsupported event {event!r}")
        return self.session

    def run_command(self, name: str) -> Optional[Session]:
        return self.apply(ev.CommandEvent(name))

    def toggle(self) -> Optional[Session]:
        return self.run_command(ev.TOGGLE)

    def highlight(self) -> Optional[Session]:
        return self.run_command(ev.HIGHLIGHT)

    def clear(self) -> Optional[Session]:
        return self.run_command(ev.CLEAR)

    def select_all(self) -> Optional[Session]:
        return self.run_command(ev.SELECT_ALL)

    def move_next(self) -> Optional[Session]:
        return self.run_command(ev.MOVE_NEXT)

    def move_prev(self) -> Optional[Session]:
        return self.run_command(ev.MOVE_PREV)

    def close(self) -> None:
        """Drop the selection listener and any session."""

        self._teardown(reason="close", restore=False)
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # --- command handlers ----------------------------------------------------
    def _toggle(self) -> None:
        if self.active:
            self._teardown(reason="toggle", restore=True)
        else:
            self._highlight_from_view()

    def _highlight(self) -> None:
        self._highlight_from_view()

    def _clear_command(self) -> None:
        self._teardown(reason="command", restore=True)

    def _select_all(self) -> None:
        if not self.active:
            self._highlight_from_view()
        session = self.session
        if session is None or not session.active:
            return
        count = self.sync.select_all(session.matches)
        self.bus.emit("highlight.select_all", count)

    def _move_next(self) -> None:
        self._navigate(forward=True)

    def _move_prev(self) -> None:
        self._navigate(forward=False)

    def _navigate(self, *, forward: bool) -> None:
        if not self.active:
            from_caret = self.view.primary_selection.is_empty
            session = self._highlight_from_view()
            if (
                session is not None
                and session.active
                and from_caret
                and session.current is not None
                and not session.config.select_matching
            ):
                self.sync.select_one(session.current)
            return

        session = self.session
        if session is None or not session.navigation.can_move:
            return
        navigation = session.navigation
        index = navigation.advance() if forward else navigation.retreat()
        if index is None:
            return
        occurrence = session.matches[index]
        self.sync.select_one(occurrence)
        self.view.reveal_range(occurrence.start, occurrence.end)
        self.bus.emit("highlight.navigate", index)
        telemetry.record_event(
            "highlight.navigate",
            level="debug",
            data={"index": index, "count": session.count},
            logger_name="luminol.highlight",
        )

    # --- transitions ---------------------------------------------------------
    def _highlight_from_view(self) -> Optional[Session]:
        buffer = self.view.buffer
        selection = self.view.primary_selection
        if not selection.is_empty:
            return self._start_session(
                buffer.get_text(selection.start, selection.end), whole_word=False
            )

        word = buffer.word_range_at(selection.active)
        if word is None:
            self._teardown(reason="no_text", restore=False)
            return None
        return self._start_session(buffer.get_text(*word), whole_word=True)

    def _start_session(self, fragment: str, *, whole_word: bool) -> Session:
        restore = self._restore_target()
        if self.session is not None:
            self._teardown(reason="rehighlight", restore=False)

        config = resolve_config(self._config_source)
        buffer = self.view.buffer
        selection = self.view.primary_selection
        result = scan_occurrences(
            buffer.text,
            compile_pattern(fragment, whole_word),
            caret=selection.active,
            selected=None if selection.is_empty else selection.as_range(),
        )
        session = Session(
            pattern=fragment,
            whole_word=whole_word,
            matches=result.matches,
            navigation=NavigationState(count=result.count, cursor=result.cursor),
            config=config,
            restore_selection=restore if config.select_matching else None,
        )
        self.session = session
        self._show_status(session.status_text(buffer))
        telemetry.record_event(
            "highlight.start",
            data={
                "pattern": fragment,
                "whole_word": whole_word,
                "matches": session.count,
                "cursor": session.cursor,
            },
            logger_name="luminol.highlight",
        )
        if not session.active:
            return session

        apply_decorations(self.view, render_decorations(result.matches, buffer, config))
        self.bus.emit("highlight.start", session)
        if config.select_matching:
            count = self.sync.select_all(session.matches)
            self.bus.emit("highlight.select_all", count)
        return session

    def _restore_target(self) -> Tuple[Selection, ...]:
        # A re-highlight keeps the selection captured by the session it replaces.
        if self.session is not None and self.session.restore_selection:
            return self.session.restore_selection
        return tuple(self.view.selections)

    def _teardown(self, *, reason: str, restore: bool) -> None:
        session = self.session
        if session is None:
            return
        self.session = None
        clear_decorations(self.view)
        self._show_status(None)
        self.bus.emit("highlight.clear", reason)
        telemetry.record_event(
            "highlight.clear",
            data={"reason": reason, "matches": session.count},
            logger_name="luminol.highlight",
        )
        if restore and session.active and session.restore_selection:
            self.sync.restore(session.restore_selection)

    def _show_status(self, text: Optional[str]) -> None:
        if text is None:
            self.view.hide_status()
        else:
            self.view.show_status(text)
        self.bus.emit("highlight.status", text)

    # --- selection feedback --------------------------------------------------
    def _on_view_selection(self, change: SelectionChange) -> None:
        self.apply(ev.SelectionChangedEvent(change.selections, change.source))

    def _selection_changed(self, event: ev.SelectionChangedEvent) -> None:
        if not self.sync.on_selection_changed():
            return
        if self.session is not None:
            self.logger.debug(f"selection::clear source={event.source}")
            self._teardown(reason="selection", restore=False)


__all__ = ["HighlightEngine"]
