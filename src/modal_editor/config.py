"""Editor settings and per-mode presentation constants."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

ENV_PREFIX = "MODAL_EDITOR_"

LINE_ENDINGS = {
    "native": os.linesep,
    "lf": "\n",
    "crlf": "\r\n",
}


class CursorShape(str, Enum):
    """Cursor style requested from the terminal host."""

    BLOCK = "block"
    BAR = "bar"


@dataclass(frozen=True)
class ModeConfig:
    """Presentation for a single editor mode."""

    label: str
    cursor_shape: CursorShape


MODE_CONFIGS: Mapping[str, ModeConfig] = {
    "normal": ModeConfig("", CursorShape.BLOCK),
    "insert": ModeConfig("-- INSERT --", CursorShape.BAR),
    "command": ModeConfig("", CursorShape.BAR),
}


@dataclass(frozen=True)
class EditorSettings:
    line_ending: str = os.linesep
    encoding: str = "utf-8"
    diff_rendering: bool = True
    show_ruler: bool = True


def _flag(environ: Mapping[str, str], name: str) -> bool:
    raw = environ.get(f"{ENV_PREFIX}{name}")
    if raw is None:
        return False
    return raw.lower() in {"1", "true", "yes", "on"}


def load_settings(environ: Optional[Mapping[str, str]] = None) -> EditorSettings:
    """Build settings from ``MODAL_EDITOR_*`` environment variables."""

    env = os.environ if environ is None else environ
    ending_key = env.get(f"{ENV_PREFIX}LINE_ENDING", "native").lower()
    if ending_key not in LINE_ENDINGS:
        raise ValueError(
            f"Unknown line ending '{ending_key}' (expected one of {sorted(LINE_ENDINGS)})"
        )
    return EditorSettings(
        line_ending=LINE_ENDINGS[ending_key],
        encoding=env.get(f"{ENV_PREFIX}ENCODING", "utf-8"),
        diff_rendering=not _flag(env, "FULL_REDRAW"),
        show_ruler=not _flag(env, "NO_RULER"),
    )


__all__ = [
    "CursorShape",
    "EditorSettings",
    "ModeConfig",
    "MODE_CONFIGS",
    "LINE_ENDINGS",
    "load_settings",
]
