"""Built-in commands and the keys that trigger them."""

from __future__ import annotations

from typing import Iterable, Sequence

from luminol.highlight import events as ev
from luminol.highlight.engine import HighlightEngine

from .models import CommandRef, KeyBinding
from .registry import CommandRegistry


def _engine_command(name: str):
    def handler(engine: HighlightEngine) -> None:
        engine.run_command(name)

    handler.__name__ = name.replace("-", "_")
    return handler


DEFAULT_COMMANDS: tuple[CommandRef, ...] = (
    CommandRef(
        id=ev.TOGGLE,
        handler=_engine_command(ev.TOGGLE),
        description="Toggle highlighting of the selection or word under the caret",
    ),
    CommandRef(
        id=ev.HIGHLIGHT,
        handler=_engine_command(ev.HIGHLIGHT),
        description="Highlight the selection or word under the caret",
    ),
    CommandRef(
        id=ev.CLEAR,
        handler=_engine_command(ev.CLEAR),
        description="Clear highlights",
    ),
    CommandRef(
        id=ev.SELECT_ALL,
        handler=_engine_command(ev.SELECT_ALL),
        description="Select every highlighted occurrence",
    ),
    CommandRef(
        id=ev.MOVE_NEXT,
        handler=_engine_command(ev.MOVE_NEXT),
        description="Move to the next occurrence",
    ),
    CommandRef(
        id=ev.MOVE_PREV,
        handler=_engine_command(ev.MOVE_PREV),
        description="Move to the previous occurrence",
    ),
)

DEFAULT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(id="toggle", key="ctrl+t", command_id=ev.TOGGLE),
    KeyBinding(id="highlight", key="ctrl+h", command_id=ev.HIGHLIGHT),
    KeyBinding(
        id="clear.escape",
        key="escape",
        command_id=ev.CLEAR,
        when=("highlight_active",),
    ),
    KeyBinding(id="select_all", key="ctrl+a", command_id=ev.SELECT_ALL),
    KeyBinding(id="next.f3", key="f3", command_id=ev.MOVE_NEXT),
    KeyBinding(id="next.ctrl_n", key="ctrl+n", command_id=ev.MOVE_NEXT),
    KeyBinding(id="prev.shift_f3", key="shift+f3", command_id=ev.MOVE_PREV),
    KeyBinding(id="prev.ctrl_p", key="ctrl+p", command_id=ev.MOVE_PREV),
)


def load_default_commands(
    registry: CommandRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[KeyBinding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in commands and their default key bindings."""

    excluded = set(exclude_bindings or ())
    for command in DEFAULT_COMMANDS:
        registry.register_command(command, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)


__all__ = ["DEFAULT_BINDINGS", "DEFAULT_COMMANDS", "load_default_commands"]
