"""Immutable configuration snapshot read by the engine at session start."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional, Union

ENV_PREFIX = "LUMINOL_"

# Host settings use camelCase; Python callers may pass field names directly.
_HOST_KEYS: Dict[str, str] = {
    "dimOpacity": "dim_opacity",
    "dimColor": "dim_color",
    "highlightColor": "highlight_color",
    "soleHighlightColor": "sole_highlight_color",
    "selectMatching": "select_matching",
    "overviewMarkers": "overview_markers",
}


class ConfigError(ValueError):
    """Raised for unknown keys or out-of-range configuration values."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


@dataclass(frozen=True, slots=True)
class HighlightConfig:
    dim_opacity: float = 0.5
    dim_color: Optional[str] = None
    highlight_color: str = "yellow"
    sole_highlight_color: str = "magenta"
    select_matching: bool = False
    overview_markers: bool = True

    def __post_init__(self) -> None:
        if not 0.0 <= self.dim_opacity <= 1.0:
            raise ConfigError(
                f"dim_opacity must be within [0, 1], got {self.dim_opacity}",
                key="dim_opacity",
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "HighlightConfig":
        """Build a snapshot from host settings; missing keys keep defaults."""

        known = {f.name: f for f in fields(cls)}
        values: Dict[str, Any] = {}
        for raw_key, raw_value in data.items():
            key = _HOST_KEYS.get(raw_key, raw_key)
            if key not in known:
                raise ConfigError(f"Unknown setting '{raw_key}'", key=raw_key)
            values[key] = _coerce(key, raw_value)
        return cls(**values)

    @classmethod
    def from_env(
        cls,
        *,
        prefix: str = ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "HighlightConfig":
        """Read ``<PREFIX>DIM_OPACITY``-style variables."""

        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for f in fields(cls):
            raw = env.get(f"{prefix}{f.name.upper()}")
            if raw is not None:
                values[f.name] = raw
        return cls.from_mapping(values)

    def with_overrides(self, **changes: Any) -> "HighlightConfig":
        return replace(
            self, **{key: _coerce(key, value) for key, value in changes.items()}
        )


ConfigSource = Union[HighlightConfig, Callable[[], HighlightConfig]]


def resolve_config(source: Optional[ConfigSource]) -> HighlightConfig:
    """Take a fresh snapshot from a config object or provider."""

    if source is None:
        return HighlightConfig()
    if isinstance(source, HighlightConfig):
        return source
    return source()


def _coerce(key: str, value: Any) -> Any:
    if key == "dim_opacity":
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"dim_opacity must be a number, got {value!r}", key=key) from exc
    if key in {"select_matching", "overview_markers"}:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)
    if value is None:
        return None
    return str(value)


__all__ = ["ConfigError", "ConfigSource", "HighlightConfig", "resolve_config"]
