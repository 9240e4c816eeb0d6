"""Command surface exposed to hosts: command ids, key bindings, dispatch."""

from .defaults import DEFAULT_BINDINGS, DEFAULT_COMMANDS, load_default_commands
from .models import CommandRef, KeyBinding, WhenClause, normalize_key
from .registry import CommandConflictError, CommandRegistry, RegistryStats

__all__ = [
    "CommandConflictError",
    "CommandRef",
    "CommandRegistry",
    "DEFAULT_BINDINGS",
    "DEFAULT_COMMANDS",
    "KeyBinding",
    "RegistryStats",
    "WhenClause",
    "load_default_commands",
    "normalize_key",
]
