from __future__ import annotations

import pytest

from luminol.config import ConfigError, HighlightConfig, resolve_config


def test_defaults() -> None:
    config = HighlightConfig()

    assert config.dim_opacity == 0.5
    assert config.select_matching is False
    assert config.overview_markers is True


def test_from_mapping_accepts_host_keys() -> None:
    config = HighlightConfig.from_mapping(
        {
            "dimOpacity": "0.25",
            "highlightColor": "cyan",
            "soleHighlightColor": "green",
            "selectMatching": True,
            "dim_color": "grey50",
        }
    )

    assert config.dim_opacity == 0.25
    assert config.highlight_color == "cyan"
    assert config.sole_highlight_color == "green"
    assert config.select_matching is True
    assert config.dim_color == "grey50"


def test_unknown_key_is_rejected() -> None:
    with pytest.raises(ConfigError) as info:
        HighlightConfig.from_mapping({"blinkRate": 3})

    assert info.value.key == "blinkRate"


@pytest.mark.parametrize("value", [-0.1, 1.5, "loud"])
def test_invalid_opacity_is_rejected(value: object) -> None:
    with pytest.raises(ConfigError):
        HighlightConfig.from_mapping({"dimOpacity": value})


def test_from_env_reads_prefixed_variables() -> None:
    config = HighlightConfig.from_env(
        environ={
            "LUMINOL_SELECT_MATCHING": "yes",
            "LUMINOL_DIM_OPACITY": "0.8",
            "LUMINOL_OVERVIEW_MARKERS": "off",
            "UNRELATED": "1",
        }
    )

    assert config.select_matching is True
    assert config.dim_opacity == 0.8
    assert config.overview_markers is False


def test_with_overrides_returns_new_snapshot() -> None:
    base = HighlightConfig()

    updated = base.with_overrides(select_matching="true")

    assert updated.select_matching is True
    assert base.select_matching is False


def test_resolve_config_accepts_snapshot_or_provider() -> None:
    snapshot = HighlightConfig(highlight_color="blue")

    assert resolve_config(None) == HighlightConfig()
    assert resolve_config(snapshot) is snapshot
    assert resolve_config(lambda: snapshot) is snapshot
