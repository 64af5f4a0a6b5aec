"""Turns editor snapshots into minimal terminal draw plans."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from rich.cells import cell_len

from modal_editor.buffer import Cursor
from modal_editor.config import MODE_CONFIGS, EditorSettings
from modal_editor.modes.base_mode import EditorMode
from modal_editor.runtime import telemetry

from .instructions import (
    ClearLine,
    ClearScreen,
    Instruction,
    MoveCursor,
    PlaceCursor,
    RenderPlan,
    WriteText,
)
from .viewport import Viewport

EMPTY_ROW_MARKER = "~"
MODIFIED_MARKER = "[+]"


@dataclass(frozen=True, slots=True)
class Frame:
    """Everything visible on screen at one instant."""

    lines: Tuple[str, ...]
    cursor: Cursor
    mode: EditorMode = EditorMode.NORMAL
    command_text: str = ""
    message: Optional[str] = None
    message_error: bool = False
    filename: Optional[str] = None
    modified: bool = False


def display_text(line: str) -> str:
    """Screen form of a buffer line: tabs are drawn as a single space."""

    return line.replace("\t", " ")


def fit_cells(text: str, width: int) -> str:
    """Longest prefix of ``text`` that fits in ``width`` terminal cells."""

    used = 0
    for index, char in enumerate(text):
        used += cell_len(char)
        if used > width:
            return text[:index]
    return text


class RenderPlanner:
    """Keeps the last drawn screen and emits instructions for rows that changed.

    The first frame, the frame after a resize, forced frames, and every frame
    when diffing is disabled start with ``ClearScreen`` and redraw all rows.
    """

    def __init__(
        self, rows: int, cols: int, *, settings: EditorSettings | None = None
    ) -> None:
        self.viewport = Viewport(rows, cols)
        self.settings = settings or EditorSettings()
        self._previous: Optional[List[str]] = None

    def resize(self, rows: int, cols: int) -> None:
        self.viewport.resize(rows, cols)
        self._previous = None

    def plan(self, frame: Frame, *, force: bool = False) -> RenderPlan:
        viewport = self.viewport
        cursor_row = frame.cursor[0]
        cursor_line = (
            frame.lines[cursor_row] if cursor_row < len(frame.lines) else ""
        )
        viewport.scroll_to(frame.cursor, display_text(cursor_line))
        rows = self._text_rows(frame)
        status, status_cursor = self._status_row(frame)
        rows.append(status)

        full = force or self._previous is None or not self.settings.diff_rendering
        instructions: List[Instruction] = []
        if full:
            instructions.append(ClearScreen())
            for index, text in enumerate(rows):
                if text:
                    instructions.append(MoveCursor(index, 0))
                    instructions.append(WriteText(text))
        else:
            previous = self._previous or []
            for index, text in enumerate(rows):
                if index < len(previous) and previous[index] == text:
                    continue
                instructions.append(MoveCursor(index, 0))
                instructions.append(ClearLine())
                if text:
                    instructions.append(WriteText(text))
        self._previous = rows

        shape = MODE_CONFIGS[frame.mode.value].cursor_shape
        if status_cursor is not None:
            cursor = PlaceCursor(viewport.status_row, status_cursor, shape)
        else:
            screen_row, screen_col = viewport.to_screen(frame.cursor)
            cursor = PlaceCursor(screen_row, screen_col, shape)

        if full:
            telemetry.record_event(
                "render.full_redraw",
                level="debug",
                data={"rows": viewport.rows, "cols": viewport.cols, "forced": force},
            )
        return RenderPlan(tuple(instructions), cursor, full_redraw=full)

    def _text_rows(self, frame: Frame) -> List[str]:
        viewport = self.viewport
        rows: List[str] = []
        for offset in range(viewport.text_rows):
            buffer_row = viewport.top + offset
            if buffer_row >= len(frame.lines):
                rows.append(EMPTY_ROW_MARKER)
                continue
            text = display_text(frame.lines[buffer_row])
            rows.append(fit_cells(text[viewport.left :], viewport.cols))
        return rows

    def _status_row(self, frame: Frame) -> Tuple[str, Optional[int]]:
        """Compose the bottom row; the second item is the cursor column in Command mode."""

        cols = self.viewport.cols
        if frame.mode is EditorMode.COMMAND:
            text = ":" + display_text(frame.command_text)
            while text and cell_len(text) > cols - 1:
                text = text[1:]
            return text, min(len(text), cols - 1)

        left = frame.message if frame.message is not None else ""
        if not left:
            left = MODE_CONFIGS[frame.mode.value].label
        left = display_text(left)

        right_parts = []
        if frame.modified:
            right_parts.append(MODIFIED_MARKER)
        if self.settings.show_ruler:
            row, col = frame.cursor
            right_parts.append(f"{row + 1},{col + 1}")
        right = " ".join(right_parts)

        if not right or cell_len(right) >= cols:
            return fit_cells(left, cols), None
        left = fit_cells(left, cols - cell_len(right) - 1)
        return left + " " * (cols - cell_len(left) - cell_len(right)) + right, None


__all__ = ["Frame", "RenderPlanner", "display_text", "fit_cells", "EMPTY_ROW_MARKER"]
