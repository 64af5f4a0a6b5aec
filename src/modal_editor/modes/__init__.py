"""Mode state machine: Normal, Insert and Command modes plus dispatch."""

from .base_mode import EditorMode, KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .command_mode import CommandMode

__all__ = [
    "EditorMode",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "NormalMode",
    "InsertMode",
    "CommandMode",
]
