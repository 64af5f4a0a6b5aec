"""Line store: the text of one buffer as an ordered list of lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .validation import BufferValidationError, ensure_cursor, ensure_row


@dataclass(slots=True)
class BufferDocument:
    """Mutable list-of-lines storage.

    Lines hold characters only; line breaks are implied between consecutive
    entries. The document never holds zero lines: an empty buffer is a single
    empty line, and deleting the last remaining line empties it instead.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    def __post_init__(self) -> None:
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        """Split on ``\\n`` only, dropping one ``\\r`` that precedes it.

        Other control and separator characters stay inside their line. A text
        ending in a line break yields a final empty line.
        """

        lines = [
            line[:-1] if line.endswith("\r") else line for line in text.split("\n")
        ]
        return cls(_lines=lines)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "BufferDocument":
        return cls(_lines=list(lines))

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def to_text(self, line_ending: str = "\n") -> str:
        return line_ending.join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        ensure_row(self, index)
        return self._lines[index]

    def insert_text(self, row: int, col: int, text: str) -> None:
        """Insert ``text`` (no line breaks) before column ``col`` of ``row``."""

        ensure_cursor(self, (row, col))
        if "\n" in text or "\r" in text:
            raise BufferValidationError(
                "insert_text cannot carry line breaks; use split_line",
                cursor=(row, col),
            )
        line = self._lines[row]
        self._lines[row] = line[:col] + text + line[col:]
        self._touch()

    def delete_char(self, row: int, col: int) -> str:
        """Remove and return the character at ``(row, col)``."""

        ensure_cursor(self, (row, col), allow_past_end=False)
        line = self._lines[row]
        if not line:
            raise BufferValidationError("No character to delete", cursor=(row, col))
        removed = line[col]
        self._lines[row] = line[:col] + line[col + 1 :]
        self._touch()
        return removed

    def split_line(self, row: int, col: int) -> None:
        """Break ``row`` at ``col``; the tail becomes a new line below."""

        ensure_cursor(self, (row, col))
        line = self._lines[row]
        self._lines[row : row + 1] = [line[:col], line[col:]]
        self._touch()

    def join_lines(self, row: int) -> int:
        """Append line ``row + 1`` to ``row``; return the join column."""

        ensure_row(self, row)
        ensure_row(self, row + 1)
        head = self._lines[row]
        self._lines[row : row + 2] = [head + self._lines[row + 1]]
        self._touch()
        return len(head)

    def delete_line(self, row: int) -> str:
        """Remove and return line ``row``; the last line is emptied instead."""

        ensure_row(self, row)
        removed = self._lines[row]
        if len(self._lines) == 1:
            self._lines[0] = ""
        else:
            del self._lines[row]
        self._touch()
        return removed

    def insert_line(self, row: int, text: str = "") -> None:
        """Insert a line so that it becomes line ``row`` (``row == line_count`` appends)."""

        if row < 0 or row > len(self._lines):
            raise BufferValidationError(
                f"Cannot insert line at {row} (0..{len(self._lines)})", cursor=(row, 0)
            )
        self._lines.insert(row, text)
        self._touch()

    def _touch(self) -> None:
        self.version += 1
