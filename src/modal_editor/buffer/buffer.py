"""High-level buffer facade combining document, cursor state, and file identity."""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, Optional

from modal_editor.runtime import telemetry

from .document import BufferDocument
from .state import BufferState, Cursor
from .validation import ensure_cursor


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        filename: Optional[str] = None,
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        final_newline: bool = False,
    ) -> None:
        self.name = name
        self.filename = filename
        # Written after the last line on save.
        self.final_newline = final_newline
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.modified = False

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        *,
        name: str = "default",
        filename: Optional[str] = None,
        final_newline: bool = False,
    ) -> "Buffer":
        return cls(
            name=name,
            filename=filename,
            document=BufferDocument.from_lines(lines),
            final_newline=final_newline,
        )

    @property
    def display_name(self) -> str:
        if self.filename:
            return os.path.basename(self.filename) or self.filename
        return "[No Name]"

    def mark_saved(self, filename: str) -> None:
        self.filename = filename
        self.modified = False

    def insert_text(self, text: str) -> None:
        """Insert ``text`` at the cursor and advance past it."""

        row, col = self.state.cursor
        with Transaction(self, "insert_text") as tx:
            self.document.insert_text(row, col, text)
            tx.commit((row, col + len(text)))

    def split_line(self) -> None:
        row, col = self.state.cursor
        with Transaction(self, "split_line") as tx:
            self.document.split_line(row, col)
            tx.commit((row + 1, 0))

    def backspace(self) -> bool:
        """Delete before the cursor, joining with the previous line at column 0.

        Returns ``False`` when the cursor sits at the very start of the buffer.
        """

        row, col = self.state.cursor
        if col == 0 and row == 0:
            return False
        with Transaction(self, "backspace") as tx:
            if col == 0:
                join_col = self.document.join_lines(row - 1)
                tx.commit((row - 1, join_col))
            else:
                self.document.delete_char(row, col - 1)
                tx.commit((row, col - 1))
        return True

    def delete_char_under_cursor(self) -> Optional[str]:
        row, col = self.state.cursor
        if col >= len(self.document.get_line(row)):
            return None
        with Transaction(self, "delete_char") as tx:
            removed = self.document.delete_char(row, col)
            tx.commit((row, col))
        return removed

    def delete_current_line(self) -> str:
        row, col = self.state.cursor
        with Transaction(self, "delete_line") as tx:
            removed = self.document.delete_line(row)
            target_row = min(row, self.document.line_count - 1)
            target_col = min(col, len(self.document.get_line(target_row)))
            tx.commit((target_row, target_col))
        return removed

    def open_line(self, *, below: bool) -> None:
        row, _ = self.state.cursor
        target = row + 1 if below else row
        with Transaction(self, "open_line") as tx:
            self.document.insert_line(target)
            tx.commit((target, 0))


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one buffer mutation in a telemetry span and marks the buffer dirty."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._before_cursor: Cursor | None = None

    def __enter__(self) -> "Transaction":
        self._before_cursor = self.buffer.state.cursor
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name, "cursor": self._before_cursor},
        )
        self._span_cm.__enter__()
        return self

    def commit(self, cursor_after: Cursor) -> None:
        ensure_cursor(self.buffer.document, cursor_after)
        self.buffer.state.set_cursor(*cursor_after)
        self.buffer.state.last_change_tick = self.buffer.document.version
        self.buffer.modified = True

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
