"""Terminal draw instructions produced by the render planner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from modal_editor.config import CursorShape


@dataclass(frozen=True, slots=True)
class MoveCursor:
    row: int
    col: int


@dataclass(frozen=True, slots=True)
class WriteText:
    text: str


@dataclass(frozen=True, slots=True)
class ClearLine:
    """Blank the whole row the cursor is on."""


@dataclass(frozen=True, slots=True)
class ClearScreen:
    """Blank every row and home the cursor."""


@dataclass(frozen=True, slots=True)
class PlaceCursor:
    """Final visible cursor position and shape."""

    row: int
    col: int
    shape: CursorShape = CursorShape.BLOCK


Instruction = Union[MoveCursor, WriteText, ClearLine, ClearScreen, PlaceCursor]


@dataclass(frozen=True, slots=True)
class RenderPlan:
    """Ordered draw instructions for one frame, ending with the cursor placement."""

    instructions: Tuple[Instruction, ...]
    cursor: PlaceCursor
    full_redraw: bool = False

    def __iter__(self):
        yield from self.instructions
        yield self.cursor

    @property
    def is_empty(self) -> bool:
        return not self.instructions


__all__ = [
    "MoveCursor",
    "WriteText",
    "ClearLine",
    "ClearScreen",
    "PlaceCursor",
    "Instruction",
    "RenderPlan",
]
