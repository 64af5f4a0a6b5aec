"""Bounds checks shared by the line store and its callers.

Failures here are programming errors: callers clamp before they edit, so a
``BufferValidationError`` means a caller skipped that step.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .state import Cursor

if TYPE_CHECKING:  # pragma: no cover
    from .document import BufferDocument


class BufferValidationError(RuntimeError):
    """Raised when a row or column falls outside the current document."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


def ensure_row(document: "BufferDocument", row: int) -> int:
    if row < 0 or row >= document.line_count:
        raise BufferValidationError(
            f"Row {row} out of range (0..{document.line_count - 1})",
            cursor=(row, 0),
        )
    return row


def ensure_cursor(
    document: "BufferDocument", cursor: Cursor, *, allow_past_end: bool = True
) -> Cursor:
    row, col = cursor
    ensure_row(document, row)
    length = len(document.get_line(row))
    limit = length if allow_past_end else max(length - 1, 0)
    if col < 0 or col > limit:
        raise BufferValidationError(
            f"Column {col} out of range (0..{limit}) on row {row}", cursor=cursor
        )
    return cursor
