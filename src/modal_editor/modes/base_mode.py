"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from modal_editor.buffer import Buffer
from modal_editor.config import EditorSettings

if TYPE_CHECKING:  # pragma: no cover
    from modal_editor.storage import FileStore


class EditorMode(str, Enum):
    """The closed set of input modes."""

    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"

    @property
    def allows_past_end(self) -> bool:
        """Whether the cursor may sit one past the last character."""

        return self is not EditorMode.NORMAL


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @classmethod
    def char(cls, character: str) -> "KeyInput":
        return cls(key=character, text=character)

    @property
    def printable(self) -> Optional[str]:
        """Text to insert for this key, or ``None`` for control keys."""

        if self.text is None or not self.text.isprintable():
            return None
        if any(mod in {"CTRL", "ALT"} for mod in self.modifiers):
            return None
        return self.text


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[EditorMode] = None
    status: str = "ok"
    message: Optional[str] = None
    error: bool = False


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    buffer: Buffer
    bus: "ModeBus"
    storage: Optional["FileStore"] = None
    settings: EditorSettings = field(default_factory=EditorSettings)
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: EditorMode = EditorMode.NORMAL

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(
        self, previous: Optional[EditorMode]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[EditorMode]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError
