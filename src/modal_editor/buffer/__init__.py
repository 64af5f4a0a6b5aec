"""Line store and buffer facade."""

from .buffer import Buffer, Transaction
from .document import BufferDocument
from .state import BufferState, Cursor
from .validation import BufferValidationError, ensure_cursor, ensure_row

__all__ = [
    "BufferDocument",
    "BufferState",
    "Cursor",
    "Buffer",
    "Transaction",
    "BufferValidationError",
    "ensure_cursor",
    "ensure_row",
]
