"""In-memory character grid that applies render plans like a terminal would."""

from __future__ import annotations

from typing import Iterable, List

from modal_editor.config import CursorShape

from .instructions import (
    ClearLine,
    ClearScreen,
    Instruction,
    MoveCursor,
    PlaceCursor,
    WriteText,
)


class ScreenGrid:
    def __init__(self, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        self._cells: List[List[str]] = self._blank()
        self._pos = (0, 0)
        self.cursor = (0, 0)
        self.cursor_shape = CursorShape.BLOCK

    def _blank(self) -> List[List[str]]:
        return [[" "] * self.cols for _ in range(self.rows)]

    def resize(self, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        self._cells = self._blank()
        self._pos = (0, 0)
        self.cursor = (0, 0)

    def apply(self, instructions: Iterable[Instruction]) -> None:
        """Apply instructions in order; text past the right edge is dropped."""

        for instruction in instructions:
            if isinstance(instruction, ClearScreen):
                self._cells = self._blank()
                self._pos = (0, 0)
            elif isinstance(instruction, MoveCursor):
                self._pos = (instruction.row, instruction.col)
            elif isinstance(instruction, ClearLine):
                row = self._pos[0]
                if 0 <= row < self.rows:
                    self._cells[row] = [" "] * self.cols
            elif isinstance(instruction, WriteText):
                self._write(instruction.text)
            elif isinstance(instruction, PlaceCursor):
                self.cursor = (instruction.row, instruction.col)
                self.cursor_shape = instruction.shape
            else:
                raise TypeError(f"Unknown draw instruction {instruction!r}")

    def _write(self, text: str) -> None:
        row, col = self._pos
        if 0 <= row < self.rows:
            cells = self._cells[row]
            for char in text:
                if 0 <= col < self.cols:
                    cells[col] = char
                col += 1
        else:
            col += len(text)
        self._pos = (row, col)

    def row_text(self, row: int) -> str:
        return "".join(self._cells[row])

    def lines(self) -> List[str]:
        """Visible rows with trailing blanks removed."""

        return [self.row_text(row).rstrip() for row in range(self.rows)]


__all__ = ["ScreenGrid"]
