from __future__ import annotations

import pytest

from luminol.highlight import Occurrence, compile_pattern, scan_occurrences


def naive_occurrences(text: str, fragment: str) -> list[tuple[int, int]]:
    found: list[tuple[int, int]] = []
    start = text.find(fragment)
    while start != -1:
        found.append((start, start + len(fragment)))
        start = text.find(fragment, start + len(fragment))
    return found


@pytest.mark.parametrize(
    "fragment",
    ["a.b", "(x)", "[0-9]+", "a|b", "$HOME", "^start", "c++", "\\n", "{1,2}", "?*"],
)
def test_compiled_pattern_matches_metacharacters_literally(fragment: str) -> None:
    pattern = compile_pattern(fragment)

    assert pattern.fullmatch(fragment) is not None
    decoy = "".join(ch for ch in fragment if ch.isalnum()) or "zz"
    assert pattern.search(decoy) is None


def test_dot_does_not_act_as_wildcard() -> None:
    pattern = compile_pattern("a.b")

    assert pattern.search("axb") is None
    assert pattern.search("a.b") is not None


def test_whole_word_pattern_respects_boundaries() -> None:
    pattern = compile_pattern("foo", whole_word=True)

    assert [m.span() for m in pattern.finditer("foo food foo_bar foo.")] == [
        (0, 3),
        (17, 20),
    ]


def test_empty_fragment_is_rejected() -> None:
    with pytest.raises(ValueError):
        compile_pattern("")


@pytest.mark.parametrize(
    "text,fragment",
    [
        ("foo bar foo baz foo", "foo"),
        ("aaaa", "aa"),
        ("aaa", "aa"),
        ("no hits here", "xyz"),
        ("line one\nline two\n", "line"),
        ("a.b a.b.a.b", "a.b"),
    ],
)
def test_scan_finds_every_non_overlapping_occurrence(text: str, fragment: str) -> None:
    result = scan_occurrences(text, compile_pattern(fragment))

    assert [o.as_range() for o in result.matches] == naive_occurrences(text, fragment)
    for left, right in zip(result.matches, result.matches[1:]):
        assert left.end <= right.start


def test_scan_seeds_cursor_from_caret() -> None:
    text = "foo bar foo baz foo"
    pattern = compile_pattern("foo")

    assert scan_occurrences(text, pattern, caret=9).cursor == 1
    assert scan_occurrences(text, pattern, caret=19).cursor == 2
    assert scan_occurrences(text, pattern, caret=5).cursor is None
    assert scan_occurrences(text, pattern).cursor is None


def test_scan_caret_on_shared_boundary_picks_first_occurrence() -> None:
    result = scan_occurrences("foofoo", compile_pattern("foo"), caret=3)

    assert result.cursor == 0


def test_scan_prefers_the_exactly_selected_occurrence() -> None:
    pattern = compile_pattern("foo")

    assert scan_occurrences("foofoo", pattern, caret=3, selected=(3, 6)).cursor == 1
    # A range matching no occurrence falls back to the caret.
    assert scan_occurrences("foofoo", pattern, caret=3, selected=(1, 4)).cursor == 0


def test_occurrence_rejects_empty_or_negative_spans() -> None:
    with pytest.raises(ValueError):
        Occurrence(3, 3)
    with pytest.raises(ValueError):
        Occurrence(-1, 2)
    assert len(Occurrence(2, 5)) == 3
