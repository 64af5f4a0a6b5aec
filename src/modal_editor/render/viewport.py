"""Visible window over the buffer with sticky scrolling."""

from __future__ import annotations

from dataclasses import dataclass

from rich.cells import cell_len

from modal_editor.buffer import Cursor


def _check_size(rows: int, cols: int) -> None:
    if rows < 1 or cols < 1:
        raise ValueError(f"Viewport needs at least 1x1 cells, got {rows}x{cols}")


@dataclass(slots=True)
class Viewport:
    """Terminal size plus the buffer row/column shown at the top-left.

    The bottom terminal row is reserved for the status line.
    """

    rows: int
    cols: int
    top: int = 0
    left: int = 0

    def __post_init__(self) -> None:
        _check_size(self.rows, self.cols)

    @property
    def text_rows(self) -> int:
        return max(self.rows - 1, 0)

    @property
    def status_row(self) -> int:
        return self.rows - 1

    def resize(self, rows: int, cols: int) -> None:
        _check_size(rows, cols)
        self.rows = rows
        self.cols = cols

    def scroll_to(self, cursor: Cursor, line: str = "") -> bool:
        """Move the offsets just enough to keep ``cursor`` visible.

        ``line`` is the cursor's row as drawn; double-width characters in it
        push the left offset further so the cursor cell stays on screen.
        Returns ``True`` when either offset changed.
        """

        row, col = cursor
        before = (self.top, self.left)
        height = max(self.text_rows, 1)
        if row < self.top:
            self.top = row
        elif row >= self.top + height:
            self.top = row - height + 1
        if col < self.left:
            self.left = col
        elif col >= self.left + self.cols:
            self.left = col - self.cols + 1
        cursor_cells = cell_len(line[col : col + 1]) or 1
        while (
            self.left < col
            and cell_len(line[self.left : col]) + cursor_cells > self.cols
        ):
            self.left += 1
        return (self.top, self.left) != before

    def to_screen(self, cursor: Cursor) -> Cursor:
        row, col = cursor
        return row - self.top, col - self.left


__all__ = ["Viewport"]
