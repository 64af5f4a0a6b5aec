"""Render planner: editor snapshots to terminal draw instructions."""

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
from .planner import Frame, RenderPlanner, display_text
from .screen import ScreenGrid

__all__ = [
    "ClearLine",
    "ClearScreen",
    "Instruction",
    "MoveCursor",
    "PlaceCursor",
    "RenderPlan",
    "WriteText",
    "Viewport",
    "Frame",
    "RenderPlanner",
    "display_text",
    "ScreenGrid",
]
