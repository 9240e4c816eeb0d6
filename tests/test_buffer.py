from __future__ import annotations

import pytest

from luminol.buffer import Buffer, BufferValidationError, Selection


def test_offset_and_position_round_trip() -> None:
    buffer = Buffer.from_text("ab\ncde\n\nf")

    assert buffer.position_at(0) == (0, 0)
    assert buffer.position_at(2) == (0, 2)
    assert buffer.position_at(3) == (1, 0)
    assert buffer.position_at(7) == (2, 0)
    assert buffer.position_at(9) == (3, 1)
    assert buffer.offset_at((1, 2)) == 5
    assert buffer.offset_at((3, 0)) == 8
    assert buffer.text == "ab\ncde\n\nf"
    assert buffer.line_count == 4


def test_line_span_excludes_line_break() -> None:
    buffer = Buffer.from_text("first\nsecond")

    assert buffer.line_span(0) == (0, 5)
    assert buffer.line_span(1) == (6, 12)


def test_word_range_at_caret_positions() -> None:
    buffer = Buffer.from_text("foo  bar_baz(1)")

    assert buffer.word_range_at(0) == (0, 3)
    assert buffer.word_range_at(1) == (0, 3)
    assert buffer.word_range_at(3) == (0, 3)
    assert buffer.word_range_at(4) is None
    assert buffer.word_range_at(7) == (5, 12)
    assert buffer.word_range_at(13) == (13, 14)


def test_word_range_on_second_line() -> None:
    buffer = Buffer.from_text("alpha\n  beta")

    assert buffer.word_range_at(9) == (8, 12)
    assert buffer.word_range_at(6) is None


def test_out_of_range_offsets_raise() -> None:
    buffer = Buffer.from_text("abc")

    with pytest.raises(BufferValidationError):
        buffer.position_at(4)
    with pytest.raises(BufferValidationError):
        buffer.offset_at((1, 0))
    with pytest.raises(BufferValidationError):
        buffer.get_text(0, 10)


def test_empty_buffer_has_one_blank_line() -> None:
    buffer = Buffer()

    assert buffer.text == ""
    assert buffer.line_count == 1
    assert buffer.line_span(0) == (0, 0)
    assert buffer.word_range_at(0) is None


def test_selection_orders_start_and_end() -> None:
    selection = Selection(anchor=7, active=2)

    assert selection.as_range() == (2, 7)
    assert not selection.is_empty
    assert Selection.caret(4).is_empty
