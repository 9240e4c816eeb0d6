"""Occurrence highlighting engine for text editors."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "config",
    "highlight",
    "runtime",
    "view",
]

__version__ = "0.1.0"
