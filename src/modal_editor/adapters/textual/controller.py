"""Adapter that wires an EditorSession into Textual-friendly UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from modal_editor.modes import KeyInput, ModeResult
from modal_editor.render import RenderPlan
from modal_editor.runtime.session import EditorSession

# Textual key names -> editor key tokens.
HOST_KEY_NAMES: Dict[str, str] = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "ctrl+h": "BACKSPACE",
    "tab": "TAB",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    apply_plan: Callable[[RenderPlan], None]
    update_status: Callable[[str], None] = _noop
    request_exit: Callable[[], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


def translate_key(
    key: str, *, text: Optional[str] = None, modifiers: Iterable[str] = ()
) -> KeyInput:
    """Build a KeyInput from a host key name and its printable text."""

    normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
    named = HOST_KEY_NAMES.get(key)
    if named is not None:
        return KeyInput(key=named, modifiers=normalized_modifiers)
    if text and len(text) == 1 and text.isprintable():
        return KeyInput(key=text, text=text, modifiers=normalized_modifiers)
    return KeyInput(key=key.upper(), modifiers=normalized_modifiers)


class TextualEditorAdapter:
    """Bridges an EditorSession to a Textual-friendly surface."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._subscribe_events()
        self.refresh(force=True)

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput, dispatch it, then redraw."""

        key_input = translate_key(key, text=text, modifiers=modifiers)
        self._log_state("key ->", key=key_input.key, text=key_input.text)
        result = self.session.handle_key(key_input)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        if self.session.should_quit:
            self.hooks.request_exit()
            return result
        self.refresh()
        return result

    def resize(self, rows: int, cols: int) -> None:
        self.session.resize(rows, cols)
        self.refresh(force=True)

    def refresh(self, *, force: bool = False) -> None:
        self.hooks.apply_plan(self.session.render(force=force))
        self.hooks.update_status(self.session.message or "")

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in (
            "command.start",
            "command.end",
            "command.submit",
            "command.write",
            "command.quit",
            "command.error",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._log_state(
                    "event ->", event=name, payload=payload
                )
            )

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        return {
            "mode": session.mode.value,
            "cursor": session.buffer.state.cursor,
            "command": session.command_text,
            "buffer_version": session.buffer.document.version,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "translate_key", "HOST_KEY_NAMES"]
