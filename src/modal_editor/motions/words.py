"""Word scanning over a document.

A word is a maximal run of non-whitespace characters on one line. The scan
walks character positions plus one line-end position per line; the line end
counts as whitespace, so words never continue across a line break and blank
lines are passed over like any other whitespace.
"""

from __future__ import annotations

from typing import Optional

from modal_editor.buffer import BufferDocument, Cursor


def _is_word(document: BufferDocument, pos: Cursor) -> bool:
    row, col = pos
    line = document.get_line(row)
    return col < len(line) and not line[col].isspace()


def _next(document: BufferDocument, pos: Cursor) -> Optional[Cursor]:
    row, col = pos
    if col < len(document.get_line(row)):
        return (row, col + 1)
    if row + 1 < document.line_count:
        return (row + 1, 0)
    return None


def _prev(document: BufferDocument, pos: Cursor) -> Optional[Cursor]:
    row, col = pos
    if col > 0:
        return (row, col - 1)
    if row > 0:
        return (row - 1, len(document.get_line(row - 1)))
    return None


def word_forward_start(document: BufferDocument, cursor: Cursor) -> Cursor:
    pos: Optional[Cursor] = cursor
    while pos is not None and _is_word(document, pos):
        pos = _next(document, pos)
    while pos is not None and not _is_word(document, pos):
        pos = _next(document, pos)
    return pos if pos is not None else cursor


def word_forward_end(document: BufferDocument, cursor: Cursor) -> Cursor:
    pos = _next(document, cursor)
    while pos is not None and not _is_word(document, pos):
        pos = _next(document, pos)
    if pos is None:
        return cursor
    while True:
        following = _next(document, pos)
        if following is None or not _is_word(document, following):
            return pos
        pos = following


def word_backward_start(document: BufferDocument, cursor: Cursor) -> Cursor:
    pos = _prev(document, cursor)
    while pos is not None and not _is_word(document, pos):
        pos = _prev(document, pos)
    if pos is None:
        return cursor
    while True:
        preceding = _prev(document, pos)
        if preceding is None or not _is_word(document, preceding):
            return pos
        pos = preceding


def word_backward_end(document: BufferDocument, cursor: Cursor) -> Cursor:
    pos: Optional[Cursor] = cursor
    while pos is not None and _is_word(document, pos):
        pos = _prev(document, pos)
    while pos is not None and not _is_word(document, pos):
        pos = _prev(document, pos)
    return pos if pos is not None else cursor


__all__ = [
    "word_forward_start",
    "word_forward_end",
    "word_backward_start",
    "word_backward_end",
]
