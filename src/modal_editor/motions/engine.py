"""Pure cursor motions: ``apply_motion(document, cursor, motion) -> cursor``."""

from __future__ import annotations

from typing import Callable, Dict

from modal_editor.buffer import BufferDocument, Cursor

from . import words
from .models import Motion, clamp_cursor, max_column

MotionFn = Callable[[BufferDocument, Cursor, bool], Cursor]


def _left(document: BufferDocument, cursor: Cursor, allow_past_end: bool) -> Cursor:
    row, col = cursor
    return (row, max(col - 1, 0))


def _right(document: BufferDocument, cursor: Cursor, allow_past_end: bool) -> Cursor:
    row, col = cursor
    limit = max_column(document.get_line(row), allow_past_end=allow_past_end)
    return (row, min(col + 1, limit))


def _to_row(
    document: BufferDocument, cursor: Cursor, row: int, allow_past_end: bool
) -> Cursor:
    _, col = cursor
    limit = max_column(document.get_line(row), allow_past_end=allow_past_end)
    return (row, min(col, limit))


def _up(document: BufferDocument, cursor: Cursor, allow_past_end: bool) -> Cursor:
    row, _ = cursor
    if row == 0:
        return cursor
    return _to_row(document, cursor, row - 1, allow_past_end)


def _down(document: BufferDocument, cursor: Cursor, allow_past_end: bool) -> Cursor:
    row, _ = cursor
    if row >= document.line_count - 1:
        return cursor
    return _to_row(document, cursor, row + 1, allow_past_end)


def _line_start(
    document: BufferDocument, cursor: Cursor, allow_past_end: bool
) -> Cursor:
    return (cursor[0], 0)


def _line_end(document: BufferDocument, cursor: Cursor, allow_past_end: bool) -> Cursor:
    row, _ = cursor
    return (row, max_column(document.get_line(row), allow_past_end=allow_past_end))


def _first_line(
    document: BufferDocument, cursor: Cursor, allow_past_end: bool
) -> Cursor:
    return _to_row(document, cursor, 0, allow_past_end)


def _last_line(
    document: BufferDocument, cursor: Cursor, allow_past_end: bool
) -> Cursor:
    return _to_row(document, cursor, document.line_count - 1, allow_past_end)


def _word(scan: Callable[[BufferDocument, Cursor], Cursor]) -> MotionFn:
    def apply(document: BufferDocument, cursor: Cursor, allow_past_end: bool) -> Cursor:
        return scan(document, cursor)

    return apply


_MOTIONS: Dict[Motion, MotionFn] = {
    Motion.LEFT: _left,
    Motion.RIGHT: _right,
    Motion.UP: _up,
    Motion.DOWN: _down,
    Motion.WORD_FORWARD_START: _word(words.word_forward_start),
    Motion.WORD_FORWARD_END: _word(words.word_forward_end),
    Motion.WORD_BACKWARD_START: _word(words.word_backward_start),
    Motion.WORD_BACKWARD_END: _word(words.word_backward_end),
    Motion.LINE_START: _line_start,
    Motion.LINE_END: _line_end,
    Motion.BUFFER_FIRST_LINE: _first_line,
    Motion.BUFFER_LAST_LINE: _last_line,
}


def apply_motion(
    document: BufferDocument,
    cursor: Cursor,
    motion: Motion,
    *,
    allow_past_end: bool = False,
) -> Cursor:
    """Return the cursor ``motion`` lands on; never mutates, never raises.

    ``allow_past_end`` selects the Insert-mode column range. The result is
    always clamped to the requested range, so callers can store it directly.
    """

    start = clamp_cursor(document, cursor, allow_past_end=allow_past_end)
    target = _MOTIONS[Motion(motion)](document, start, allow_past_end)
    return clamp_cursor(document, target, allow_past_end=allow_past_end)


__all__ = ["apply_motion"]
