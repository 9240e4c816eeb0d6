"""Derivation of decoration layers from a match set."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from luminol.buffer import Buffer
from luminol.config import HighlightConfig
from luminol.view import DecorationStyle, EditorView

from .scanner import MatchSet

DIM_LAYER = "dim"
HIGHLIGHT_LAYER = "highlight"
SOLE_LAYER = "sole"
OVERVIEW_LAYER = "overview"

# Paint order, bottom first.
LAYER_ORDER: Tuple[str, ...] = (DIM_LAYER, SOLE_LAYER, HIGHLIGHT_LAYER, OVERVIEW_LAYER)

Ranges = Tuple[Tuple[int, int], ...]


@dataclass(frozen=True, slots=True)
class DecorationState:
    """Layers to render; always recomputable from the session."""

    layers: Mapping[str, Ranges] = field(default_factory=dict)
    styles: Mapping[str, DecorationStyle] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "layers", MappingProxyType(dict(self.layers)))
        object.__setattr__(self, "styles", MappingProxyType(dict(self.styles)))

    @property
    def is_empty(self) -> bool:
        return not self.layers

    @property
    def match_layer(self) -> str | None:
        """Which of the mutually exclusive match layers is present, if any."""

        for name in (SOLE_LAYER, HIGHLIGHT_LAYER):
            if name in self.layers:
                return name
        return None


EMPTY_DECORATIONS = DecorationState()


def layer_styles(config: HighlightConfig) -> Dict[str, DecorationStyle]:
    return {
        DIM_LAYER: DecorationStyle(color=config.dim_color, opacity=config.dim_opacity),
        SOLE_LAYER: DecorationStyle(color=config.sole_highlight_color, opacity=1.0),
        HIGHLIGHT_LAYER: DecorationStyle(color=config.highlight_color, opacity=1.0),
        OVERVIEW_LAYER: DecorationStyle(overview_color=config.highlight_color),
    }


def render_decorations(
    matches: MatchSet, buffer: Buffer, config: HighlightConfig
) -> DecorationState:
    """Compute the layers for an active session over ``matches``.

    An empty match set renders nothing: the dim layer only exists while
    something is highlighted.
    """

    if not matches:
        return EMPTY_DECORATIONS

    layers: Dict[str, Ranges] = {DIM_LAYER: ((0, len(buffer)),)}
    ranges = tuple(occurrence.as_range() for occurrence in matches)
    if len(matches) == 1:
        layers[SOLE_LAYER] = ranges
    else:
        layers[HIGHLIGHT_LAYER] = ranges

    if config.overview_markers:
        # One marker per occurrence, so a line with several matches stacks them.
        layers[OVERVIEW_LAYER] = tuple(
            buffer.line_span(buffer.position_at(occurrence.start)[0])
            for occurrence in matches
        )

    styles = layer_styles(config)
    return DecorationState(
        layers=layers, styles={name: styles[name] for name in layers}
    )


def clear_decorations(view: EditorView) -> None:
    for name in LAYER_ORDER:
        view.remove_decorations(name)


def apply_decorations(view: EditorView, state: DecorationState) -> None:
    """Replace every layer on ``view`` with ``state``, dim layer first."""

    clear_decorations(view)
    for name in LAYER_ORDER:
        ranges = state.layers.get(name)
        if ranges is None:
            continue
        view.set_decorations(name, ranges, state.styles[name])


__all__ = [
    "DIM_LAYER",
    "HIGHLIGHT_LAYER",
    "SOLE_LAYER",
    "OVERVIEW_LAYER",
    "LAYER_ORDER",
    "DecorationState",
    "EMPTY_DECORATIONS",
    "apply_decorations",
    "clear_decorations",
    "layer_styles",
    "render_decorations",
]
