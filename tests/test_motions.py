import pytest

from modal_editor.buffer import BufferDocument
from modal_editor.motions import Motion, apply_motion, clamp_cursor, max_column


def make_document(*lines: str) -> BufferDocument:
    return BufferDocument.from_lines(lines)


def test_word_forward_start_crosses_line() -> None:
    document = make_document("hello world", "foo")

    first = apply_motion(document, (0, 0), Motion.WORD_FORWARD_START)
    second = apply_motion(document, first, Motion.WORD_FORWARD_START)

    assert first == (0, 6)
    assert second == (1, 0)


def test_word_forward_start_skips_blank_lines() -> None:
    document = make_document("one", "", "   ", "two")

    assert apply_motion(document, (0, 1), Motion.WORD_FORWARD_START) == (3, 0)


def test_word_forward_start_at_end_of_buffer_is_noop() -> None:
    document = make_document("one two")

    assert apply_motion(document, (0, 4), Motion.WORD_FORWARD_START) == (0, 4)


def test_word_classes_are_whitespace_only() -> None:
    document = make_document("foo.bar baz")

    assert apply_motion(document, (0, 0), Motion.WORD_FORWARD_START) == (0, 8)


def test_word_forward_end() -> None:
    document = make_document("hello world", "foo")

    assert apply_motion(document, (0, 1), Motion.WORD_FORWARD_END) == (0, 4)
    assert apply_motion(document, (0, 4), Motion.WORD_FORWARD_END) == (0, 10)
    assert apply_motion(document, (0, 10), Motion.WORD_FORWARD_END) == (1, 2)
    assert apply_motion(document, (1, 2), Motion.WORD_FORWARD_END) == (1, 2)


def test_word_backward_start() -> None:
    document = make_document("foo", "hello world")

    assert apply_motion(document, (1, 8), Motion.WORD_BACKWARD_START) == (1, 6)
    assert apply_motion(document, (1, 6), Motion.WORD_BACKWARD_START) == (1, 0)
    assert apply_motion(document, (1, 0), Motion.WORD_BACKWARD_START) == (0, 0)
    assert apply_motion(document, (0, 0), Motion.WORD_BACKWARD_START) == (0, 0)


def test_word_backward_end() -> None:
    document = make_document("foo", "", "hello world")

    assert apply_motion(document, (2, 8), Motion.WORD_BACKWARD_END) == (2, 4)
    assert apply_motion(document, (2, 10), Motion.WORD_BACKWARD_END) == (2, 4)
    assert apply_motion(document, (2, 2), Motion.WORD_BACKWARD_END) == (0, 2)
    assert apply_motion(document, (0, 1), Motion.WORD_BACKWARD_END) == (0, 1)


def test_w_then_b_returns_to_word_start() -> None:
    document = make_document("alpha beta  gamma", "delta", "", "epsilon zeta")
    starts = [(0, 0), (0, 6), (0, 12), (1, 0), (3, 0), (3, 8)]

    for here, there in zip(starts, starts[1:]):
        assert apply_motion(document, here, Motion.WORD_FORWARD_START) == there
        assert apply_motion(document, there, Motion.WORD_BACKWARD_START) == here


def test_horizontal_motions_do_not_wrap() -> None:
    document = make_document("ab", "cd")

    assert apply_motion(document, (1, 0), Motion.LEFT) == (1, 0)
    assert apply_motion(document, (0, 1), Motion.RIGHT) == (0, 1)
    assert apply_motion(document, (0, 1), Motion.RIGHT, allow_past_end=True) == (0, 2)


def test_vertical_motion_keeps_or_clamps_column() -> None:
    document = make_document("long line", "ab", "another line")

    assert apply_motion(document, (0, 5), Motion.DOWN) == (1, 1)
    assert apply_motion(document, (0, 5), Motion.DOWN, allow_past_end=True) == (1, 2)
    assert apply_motion(document, (1, 1), Motion.DOWN) == (2, 1)
    assert apply_motion(document, (0, 3), Motion.UP) == (0, 3)
    assert apply_motion(document, (2, 3), Motion.DOWN) == (2, 3)


def test_line_start_and_end_by_mode() -> None:
    document = make_document("hello", "")

    assert apply_motion(document, (0, 3), Motion.LINE_START) == (0, 0)
    assert apply_motion(document, (0, 0), Motion.LINE_END) == (0, 4)
    assert apply_motion(document, (0, 0), Motion.LINE_END, allow_past_end=True) == (0, 5)
    assert apply_motion(document, (1, 0), Motion.LINE_END) == (1, 0)


def test_buffer_first_and_last_line() -> None:
    document = make_document("abcdef", "x", "ghijkl")

    assert apply_motion(document, (0, 4), Motion.BUFFER_LAST_LINE) == (2, 4)
    assert apply_motion(document, (2, 4), Motion.BUFFER_FIRST_LINE) == (0, 4)
    assert apply_motion(document, (1, 0), Motion.BUFFER_LAST_LINE) == (2, 0)


@pytest.mark.parametrize("motion", list(Motion))
def test_motions_never_raise_on_empty_buffer(motion: Motion) -> None:
    document = make_document()

    assert apply_motion(document, (0, 0), motion) == (0, 0)


def test_apply_motion_clamps_out_of_range_start() -> None:
    document = make_document("abc")

    assert apply_motion(document, (5, 9), Motion.LEFT) == (0, 1)


def test_clamp_helpers() -> None:
    document = make_document("abc", "")

    assert max_column("abc", allow_past_end=False) == 2
    assert max_column("", allow_past_end=False) == 0
    assert max_column("abc", allow_past_end=True) == 3
    assert clamp_cursor(document, (0, 3), allow_past_end=False) == (0, 2)
    assert clamp_cursor(document, (1, 2), allow_past_end=True) == (1, 0)
