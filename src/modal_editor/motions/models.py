"""Motion identifiers and column-range helpers."""

from __future__ import annotations

from enum import Enum

from modal_editor.buffer import BufferDocument, Cursor


class Motion(str, Enum):
    """Cursor-only movements understood by ``apply_motion``."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    WORD_FORWARD_START = "word_forward_start"
    WORD_FORWARD_END = "word_forward_end"
    WORD_BACKWARD_START = "word_backward_start"
    WORD_BACKWARD_END = "word_backward_end"
    LINE_START = "line_start"
    LINE_END = "line_end"
    BUFFER_FIRST_LINE = "buffer_first_line"
    BUFFER_LAST_LINE = "buffer_last_line"


def max_column(line: str, *, allow_past_end: bool) -> int:
    """Largest valid column on ``line``.

    Insert mode may sit one past the last character; Normal mode must sit on
    a character, except on an empty line where column 0 is the only choice.
    """

    if allow_past_end:
        return len(line)
    return max(len(line) - 1, 0)


def clamp_cursor(
    document: BufferDocument, cursor: Cursor, *, allow_past_end: bool
) -> Cursor:
    row, col = cursor
    row = max(0, min(row, document.line_count - 1))
    line = document.get_line(row)
    col = max(0, min(col, max_column(line, allow_past_end=allow_past_end)))
    return (row, col)
