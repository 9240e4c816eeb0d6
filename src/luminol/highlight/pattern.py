"""Literal fragment to search pattern compilation."""

from __future__ import annotations

import re
from typing import Pattern


def compile_pattern(fragment: str, whole_word: bool = False) -> Pattern[str]:
    """Compile ``fragment`` so it only ever matches itself, literally.

    With ``whole_word`` the match must also start and end on word boundaries.
    """

    if not fragment:
        raise ValueError("Cannot search for an empty fragment")
    escaped = re.escape(fragment)
    if whole_word:
        escaped = rf"\b{escaped}\b"
    return re.compile(escaped)


__all__ = ["compile_pattern"]
