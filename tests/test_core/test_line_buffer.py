# tests/test_core/test_line_buffer.py
"""Unit tests for `LineBuffer` edit primitives and capacity limits."""

import pytest

from tedit.core.LineBuffer import LineBuffer


def test_new_buffer_has_one_empty_line() -> None:
    buf = LineBuffer()
    assert buf.lines == [""]
    assert buf.num_lines == 1


def test_replace_lines_empty_input_gives_one_empty_line() -> None:
    buf = LineBuffer(["a", "b"])
    buf.replace_lines([])
    assert buf.lines == [""]


def test_replace_lines_clips_length_and_count() -> None:
    """Lines are truncated to L_max - 1 characters; lines past N_max are dropped."""
    buf = LineBuffer(max_line_length=5, max_lines=2)
    buf.replace_lines(["abcdefgh", "xy", "dropped"])
    assert buf.lines == ["abcd", "xy"]


def test_invalid_limits_rejected() -> None:
    with pytest.raises(ValueError):
        LineBuffer(max_line_length=1)
    with pytest.raises(ValueError):
        LineBuffer(max_lines=0)


class TestInsert:
    def test_insert_char_shifts_tail(self) -> None:
        buf = LineBuffer(["ac"])
        assert buf.insert_char(0, 1, "b") == (0, 2)
        assert buf.lines == ["abc"]

    def test_insert_char_at_capacity_is_noop(self) -> None:
        """A line already holding L_max - 1 characters does not grow."""
        buf = LineBuffer(["abcd"], max_line_length=5)
        assert buf.insert_char(0, 2, "x") is None
        assert buf.lines == ["abcd"]

    def test_insert_char_one_below_capacity_succeeds(self) -> None:
        buf = LineBuffer(["abc"], max_line_length=5)
        assert buf.insert_char(0, 3, "d") == (0, 4)
        assert buf.lines == ["abcd"]

    def test_insert_char_requires_single_character(self) -> None:
        buf = LineBuffer()
        with pytest.raises(ValueError):
            buf.insert_char(0, 0, "ab")

    def test_insert_text_is_all_or_nothing(self) -> None:
        buf = LineBuffer(["ab"], max_line_length=6)
        assert buf.insert_text(0, 0, "1234") is None
        assert buf.lines == ["ab"]
        assert buf.insert_text(0, 0, "123") == (0, 3)
        assert buf.lines == ["123ab"]

    def test_insert_text_rejects_newlines(self) -> None:
        buf = LineBuffer()
        with pytest.raises(ValueError):
            buf.insert_text(0, 0, "a\nb")


class TestDelete:
    def test_delete_backward_removes_left_char(self) -> None:
        buf = LineBuffer(["abc"])
        assert buf.delete_backward(0, 2) == (0, 1)
        assert buf.lines == ["ac"]

    def test_delete_backward_at_origin_is_noop(self) -> None:
        buf = LineBuffer(["abc"])
        assert buf.delete_backward(0, 0) is None
        assert buf.lines == ["abc"]

    def test_delete_backward_joins_lines(self) -> None:
        buf = LineBuffer(["foo", "bar"])
        assert buf.delete_backward(1, 0) == (0, 3)
        assert buf.lines == ["foobar"]

    def test_join_that_would_overflow_is_noop(self) -> None:
        buf = LineBuffer(["abc", "de"], max_line_length=5)
        assert buf.delete_backward(1, 0) is None
        assert buf.lines == ["abc", "de"]

    def test_delete_forward_removes_char_under_cursor(self) -> None:
        buf = LineBuffer(["abc"])
        assert buf.delete_forward(0, 1) == (0, 1)
        assert buf.lines == ["ac"]

    def test_delete_forward_joins_next_line(self) -> None:
        buf = LineBuffer(["foo", "bar"])
        assert buf.delete_forward(0, 3) == (0, 3)
        assert buf.lines == ["foobar"]

    def test_delete_forward_at_document_end_is_noop(self) -> None:
        buf = LineBuffer(["foo"])
        assert buf.delete_forward(0, 3) is None


class TestSplit:
    def test_split_with_auto_indent(self) -> None:
        buf = LineBuffer(["  abcdef"])
        assert buf.split_line(0, 5, auto_indent=True) == (1, 2)
        assert buf.lines == ["  abc", "  def"]

    def test_split_without_auto_indent(self) -> None:
        buf = LineBuffer(["  abcdef"])
        assert buf.split_line(0, 5, auto_indent=False) == (1, 0)
        assert buf.lines == ["  abc", "def"]

    def test_indent_counts_only_the_kept_part(self) -> None:
        """Splitting inside the leading spaces indents by the spaces before the cursor."""
        buf = LineBuffer(["    x"])
        assert buf.split_line(0, 2, auto_indent=True) == (1, 2)
        assert buf.lines == ["  ", "    x"]

    def test_split_at_max_lines_is_noop(self) -> None:
        buf = LineBuffer(["a", "b"], max_lines=2)
        assert buf.split_line(0, 1) is None
        assert buf.lines == ["a", "b"]

    def test_indented_remainder_stays_within_capacity(self) -> None:
        buf = LineBuffer(["   abc"], max_line_length=7)
        buf.split_line(0, 3, auto_indent=True)
        assert buf.lines == ["   ", "   abc"]
        assert all(len(line) <= buf.line_capacity for line in buf.lines)


def test_snapshot_is_immutable_copy() -> None:
    buf = LineBuffer(["a", "b"])
    snap = buf.snapshot()
    buf.insert_char(0, 1, "x")
    assert snap == ("a", "b")
    assert buf.lines == ["ax", "b"]


def test_visible_slice() -> None:
    buf = LineBuffer([str(i) for i in range(10)])
    assert buf.visible_slice(8, 5) == ["8", "9"]
    assert buf.visible_slice(10, 5) == []
    assert buf.visible_slice(0, 0) == []
