"""Occurrence search, decoration, navigation and the engine tying them together."""

from .decorations import (
    DIM_LAYER,
    HIGHLIGHT_LAYER,
    OVERVIEW_LAYER,
    SOLE_LAYER,
    DecorationState,
    apply_decorations,
    clear_decorations,
    render_decorations,
)
from .engine import HighlightEngine
from .events import COMMAND_NAMES, CommandEvent, SelectionChangedEvent
from .navigation import NavigationState
from .pattern import compile_pattern
from .scanner import MatchSet, Occurrence, ScanResult, scan_occurrences
from .selection_sync import SelectionSync, SuppressionFlag
from .session import Session

__all__ = [
    "COMMAND_NAMES",
    "CommandEvent",
    "DIM_LAYER",
    "DecorationState",
    "HIGHLIGHT_LAYER",
    "HighlightEngine",
    "MatchSet",
    "NavigationState",
    "OVERVIEW_LAYER",
    "Occurrence",
    "SOLE_LAYER",
    "ScanResult",
    "SelectionChangedEvent",
    "SelectionSync",
    "Session",
    "SuppressionFlag",
    "apply_decorations",
    "clear_decorations",
    "compile_pattern",
    "render_decorations",
    "scan_occurrences",
]
