"""Command-line mode: accumulates a ``:`` command until submitted or aborted."""

from __future__ import annotations

from typing import List

from modal_editor.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import (
    command_state,
    execute_match,
    key_to_token,
    require_keymap_resolver,
)


class CommandMode(Mode):
    name = EditorMode.COMMAND

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("modal_editor.modes.command")
        self._resolver = require_keymap_resolver(context)
        self._typed: List[str] = []

    def on_enter(self, previous: EditorMode | None) -> None:
        del previous
        self._typed.clear()
        self.context.bus.emit("command.start", None)
        self._sync_command_state()

    def on_exit(self, next_mode: EditorMode | None) -> None:
        del next_mode
        self.context.bus.emit("command.end", self.current_command)
        self._typed.clear()
        self._sync_command_state()

    @property
    def current_command(self) -> str:
        return "".join(self._typed)

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self._resolver.resolve(self.name, (key_to_token(key),))
        if result.status == "match" and result.match:
            return execute_match(self.context, result.match)
        return self._handle_text_input(key)

    def _handle_text_input(self, key: KeyInput) -> ModeResult:
        if key.key == "BACKSPACE":
            if not self._typed:
                return ModeResult(
                    consumed=True,
                    switch_to=EditorMode.NORMAL,
                    status="command_cancel",
                )
            self._typed.pop()
            self._sync_command_state()
            return ModeResult(consumed=True, status="editing")

        text = key.printable
        if text:
            self._typed.append(text)
            self._sync_command_state()
            return ModeResult(consumed=True, status="editing")

        return ModeResult(consumed=False, status="miss")

    def _sync_command_state(self) -> None:
        command_state(self.context)["text"] = self.current_command
