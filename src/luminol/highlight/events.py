"""Inbound events accepted by ``HighlightEngine.apply``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from luminol.buffer import Selection

TOGGLE = "toggle-highlight"
HIGHLIGHT = "highlight-selection"
CLEAR = "clear-highlights"
SELECT_ALL = "select-highlighted"
MOVE_NEXT = "move-next-match"
MOVE_PREV = "move-prev-match"

COMMAND_NAMES: Tuple[str, ...] = (
    TOGGLE,
    HIGHLIGHT,
    CLEAR,
    SELECT_ALL,
    MOVE_NEXT,
    MOVE_PREV,
)


@dataclass(frozen=True, slots=True)
class CommandEvent:
    name: str

    def __post_init__(self) -> None:
        if self.name not in COMMAND_NAMES:
            raise ValueError(f"Unknown command '{self.name}'")


@dataclass(frozen=True, slots=True)
class SelectionChangedEvent:
    selections: Tuple[Selection, ...]
    source: str = "user"


EngineEvent = Union[CommandEvent, SelectionChangedEvent]

__all__ = [
    "TOGGLE",
    "HIGHLIGHT",
    "CLEAR",
    "SELECT_ALL",
    "MOVE_NEXT",
    "MOVE_PREV",
    "COMMAND_NAMES",
    "CommandEvent",
    "SelectionChangedEvent",
    "EngineEvent",
]
