from __future__ import annotations

from typing import List, Optional, Tuple

import pytest

from luminol.buffer import Selection
from luminol.config import ConfigSource, HighlightConfig
from luminol.highlight import (
    DIM_LAYER,
    HIGHLIGHT_LAYER,
    OVERVIEW_LAYER,
    SOLE_LAYER,
    CommandEvent,
    HighlightEngine,
    NavigationState,
    SelectionChangedEvent,
    Session,
)
from luminol.view import MemoryEditorView

SCENARIO_TEXT = "foo bar foo baz foo"


def make_engine(
    text: str,
    *,
    selection: Optional[Selection] = None,
    config: Optional[ConfigSource] = None,
    visible_lines: Optional[int] = None,
) -> Tuple[HighlightEngine, MemoryEditorView]:
    view = MemoryEditorView.from_text(
        text,
        selections=[selection or Selection.caret(0)],
        visible_lines=visible_lines,
    )
    return HighlightEngine(view, config=config), view


def ranges(engine: HighlightEngine) -> List[Tuple[int, int]]:
    return [occurrence.as_range() for occurrence in engine.matches]


def test_scenario_a_selected_text_highlights_all_occurrences() -> None:
    engine, view = make_engine(SCENARIO_TEXT, selection=Selection(0, 3))

    session = engine.highlight()

    assert session is not None and session.active
    assert session.whole_word is False
    assert ranges(engine) == [(0, 3), (8, 11), (16, 19)]
    assert engine.cursor == 0
    assert list(view.decorations) == [DIM_LAYER, HIGHLIGHT_LAYER, OVERVIEW_LAYER]
    assert view.decorations[DIM_LAYER].ranges == ((0, 19),)
    assert view.status_text == "3 matches, spanning 1 lines"


def test_scenario_b_word_under_caret_uses_whole_word() -> None:
    engine, view = make_engine("hello", selection=Selection.caret(2))

    session = engine.highlight()

    assert session is not None
    assert session.pattern == "hello"
    assert session.whole_word is True
    assert ranges(engine) == [(0, 5)]
    assert SOLE_LAYER in view.decorations
    assert HIGHLIGHT_LAYER not in view.decorations
    assert view.status_text == "1 matches, spanning 1 lines"


def test_scenario_c_next_cycles_and_wraps() -> None:
    engine, view = make_engine(SCENARIO_TEXT, selection=Selection(0, 3))
    engine.highlight()

    seen = []
    for _ in range(3):
        engine.move_next()
        seen.append(engine.cursor)

    assert seen == [1, 2, 0]
    assert engine.active
    assert view.primary_selection == Selection(0, 3)


def test_prev_walks_backwards_and_wraps() -> None:
    engine, view = make_engine(SCENARIO_TEXT, selection=Selection(0, 3))
    engine.highlight()

    engine.move_prev()
    assert engine.cursor == 2
    assert view.primary_selection == Selection(16, 19)

    engine.move_prev()
    assert engine.cursor == 1
    assert engine.active


def test_scenario_d_select_matching_selects_and_restores() -> None:
    original = Selection(0, 3)
    engine, view = make_engine(
        SCENARIO_TEXT,
        selection=original,
        config=HighlightConfig(select_matching=True),
    )

    engine.highlight()

    assert view.selections == (Selection(0, 3), Selection(8, 11), Selection(16, 19))
    assert engine.active

    engine.clear()

    assert view.selections == (original,)
    assert not engine.active
    assert not engine.sync.flag.armed


def test_selection_driven_clear_keeps_user_selection() -> None:
    engine, view = make_engine(
        SCENARIO_TEXT,
        selection=Selection(0, 3),
        config=HighlightConfig(select_matching=True),
    )
    engine.highlight()

    view.move_caret(5)

    assert engine.session is None
    assert view.selections == (Selection.caret(5),)


def test_clear_is_total_reset() -> None:
    engine, view = make_engine(SCENARIO_TEXT, selection=Selection(0, 3))
    engine.highlight()
    engine.move_next()

    engine.clear()

    assert engine.session is None
    assert engine.active is False
    assert engine.matches == ()
    assert engine.cursor is None
    assert engine.decorations.is_empty
    assert view.decorations == {}
    assert view.status_text is None


def test_clear_without_session_is_noop() -> None:
    engine, view = make_engine(SCENARIO_TEXT)

    engine.clear()

    assert engine.session is None
    assert view.selections == (Selection.caret(0),)


def test_user_selection_change_clears_session() -> None:
    engine, view = make_engine(SCENARIO_TEXT, selection=Selection(0, 3))
    engine.highlight()

    view.move_caret(12)

    assert engine.session is None
    assert view.decorations == {}


def test_armed_flag_swallows_exactly_one_change() -> None:
    engine, view = make_engine(SCENARIO_TEXT, selection=Selection(0, 3))
    engine.highlight()

    engine.sync.flag.arm()
    view.move_caret(12)
    assert engine.active

    view.move_caret(13)
    assert engine.session is None


def test_flag_is_consumed_even_without_session() -> None:
    engine, view = make_engine(SCENARIO_TEXT)
    engine.sync.flag.arm()

    view.move_caret(4)

    assert not engine.sync.flag.armed


def test_toggle_switches_on_and_off() -> None:
    engine, view = make_engine(SCENARIO_TEXT, selection=Selection.caret(9))

    engine.toggle()
    assert engine.active
    assert engine.cursor == 1

    engine.toggle()
    assert engine.session is None
    assert view.status_text is None


def test_no_word_under_caret_is_noop() -> None:
    engine, view = make_engine("foo  bar", selection=Selection.caret(4))

    assert engine.highlight() is None
    assert engine.session is None
    assert view.decorations == {}


def test_caret_outside_every_occurrence_leaves_cursor_unset() -> None:
    # "aa" selected at 1..3 in "aaa aa": the scan finds (0, 2) and (4, 6),
    # neither of which contains the caret at 3.
    engine, view = make_engine("aaa aa", selection=Selection(1, 3))

    engine.highlight()

    assert ranges(engine) == [(0, 2), (4, 6)]
    assert engine.cursor is None


def test_unset_cursor_moves_to_first_or_last() -> None:
    engine, view = make_engine("aaa aa", selection=Selection(1, 3))
    engine.highlight()

    engine.move_next()
    assert engine.cursor == 0
    assert view.primary_selection == Selection(0, 2)

    engine, view = make_engine("aaa aa", selection=Selection(1, 3))
    engine.highlight()
    engine.move_prev()
    assert engine.cursor == 1
    assert view.primary_selection == Selection(4, 6)


def test_rehighlight_replaces_session_wholesale() -> None:
    engine, _ = make_engine(SCENARIO_TEXT, selection=Selection(0, 3))
    first = engine.highlight()
    engine.move_next()

    second = engine.highlight()

    assert second is not first
    # The caret now sits on the second occurrence, which seeds the new cursor.
    assert second is not None and second.cursor == 1
    assert ranges(engine) == [(0, 3), (8, 11), (16, 19)]


def test_select_all_highlights_first_when_inactive() -> None:
    engine, view = make_engine("foo bar foo", selection=Selection.caret(1))

    engine.select_all()

    assert engine.active
    assert view.selections == (Selection(0, 3), Selection(8, 11))


def test_select_all_without_resolvable_text_is_noop() -> None:
    engine, view = make_engine("   ", selection=Selection.caret(1))

    engine.select_all()

    assert engine.session is None
    assert view.selections == (Selection.caret(1),)


def test_next_without_session_highlights_and_selects_caret_word() -> None:
    engine, view = make_engine("foo bar foo", selection=Selection.caret(9))

    engine.move_next()

    assert engine.active
    assert engine.cursor == 1
    assert view.primary_selection == Selection(8, 11)


def test_next_without_session_keeps_explicit_selection() -> None:
    engine, view = make_engine(SCENARIO_TEXT, selection=Selection(8, 11))

    engine.move_next()

    assert engine.active
    assert engine.cursor == 1
    assert view.primary_selection == Selection(8, 11)


def test_navigation_with_single_match_is_noop() -> None:
    engine, view = make_engine("hello world", selection=Selection.caret(1))
    engine.highlight()

    engine.move_next()
    engine.move_prev()

    assert engine.cursor == 0
    assert view.primary_selection == Selection.caret(1)
    assert engine.active


def test_navigation_reveals_offscreen_occurrence_only() -> None:
    lines = ["needle"] + ["filler"] * 24 + ["needle"] + ["filler"] * 4
    engine, view = make_engine(
        "\n".join(lines), selection=Selection(0, 6), visible_lines=10
    )
    engine.highlight()

    engine.move_next()
    assert view.first_visible_line == 20
    assert view.is_visible(*engine.matches[1].as_range())

    view.first_visible_line = 0
    view.visible_lines = None
    engine.move_next()
    assert view.first_visible_line == 0


def test_config_provider_is_read_at_each_session_start() -> None:
    calls: List[int] = []

    def provider() -> HighlightConfig:
        calls.append(1)
        return HighlightConfig(overview_markers=len(calls) > 1)

    engine, view = make_engine(
        SCENARIO_TEXT, selection=Selection(0, 3), config=provider
    )

    engine.highlight()
    assert OVERVIEW_LAYER not in view.decorations
    engine.move_next()
    assert len(calls) == 1

    engine.highlight()
    assert OVERVIEW_LAYER in view.decorations
    assert len(calls) == 2


def test_engine_publishes_bus_events() -> None:
    engine, view = make_engine(SCENARIO_TEXT, selection=Selection(0, 3))
    events: List[Tuple[str, object]] = []
    for name in (
        "highlight.start",
        "highlight.clear",
        "highlight.navigate",
        "highlight.status",
    ):
        engine.bus.subscribe(name, lambda payload, name=name: events.append((name, payload)))

    engine.highlight()
    engine.move_next()
    view.move_caret(2)

    names = [name for name, _ in events]
    assert names == [
        "highlight.status",
        "highlight.start",
        "highlight.navigate",
        "highlight.status",
        "highlight.clear",
    ]
    assert events[2] == ("highlight.navigate", 1)
    assert events[4] == ("highlight.clear", "selection")


def test_apply_routes_both_event_kinds() -> None:
    engine, view = make_engine(SCENARIO_TEXT, selection=Selection(0, 3))

    session = engine.apply(CommandEvent("highlight-selection"))
    assert session is not None and session.active

    assert engine.apply(SelectionChangedEvent(view.selections)) is None


def test_apply_rejects_unknown_input() -> None:
    engine, _ = make_engine(SCENARIO_TEXT)

    with pytest.raises(ValueError):
        CommandEvent("explode")
    with pytest.raises(TypeError):
        engine.apply("toggle-highlight")  # type: ignore[arg-type]


def test_close_detaches_listener() -> None:
    engine, view = make_engine(SCENARIO_TEXT, selection=Selection(0, 3))
    engine.highlight()

    engine.close()
    engine.sync.flag.arm()
    view.move_caret(1)

    assert engine.session is None
    assert engine.sync.flag.armed


def test_zero_match_session_is_inactive_and_reports_count() -> None:
    session = Session(
        pattern="zzz",
        whole_word=False,
        matches=(),
        navigation=NavigationState(),
        config=HighlightConfig(),
    )
    view = MemoryEditorView.from_text("abc")

    assert session.active is False
    assert session.cursor is None
    assert session.status_text(view.buffer) == "0 matches"


def test_status_counts_spanned_lines() -> None:
    engine, view = make_engine("foo\nbar\nfoo\n", selection=Selection(0, 3))

    engine.highlight()

    assert view.status_text == "2 matches, spanning 3 lines"


def test_backward_selection_seeds_the_selected_occurrence() -> None:
    # The caret at 2 also touches the end of the first "ab".
    engine, view = make_engine("abab", selection=Selection(4, 2))

    engine.highlight()
    assert engine.cursor == 1

    engine.move_next()
    assert engine.cursor == 0
    assert view.primary_selection == Selection(0, 2)


def test_reveal_without_viewport_height_scrolls_to_top() -> None:
    view = MemoryEditorView.from_text("a\nb\nc", first_visible_line=2)

    assert view.reveal_range(0, 1) is True
    assert view.first_visible_line == 0
