"""Insert mode: keys become text, except the bound editing keys."""

from __future__ import annotations

from modal_editor.motions import clamp_cursor
from modal_editor.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, key_to_token, require_keymap_resolver


class InsertMode(Mode):
    name = EditorMode.INSERT

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("modal_editor.modes.insert")
        self._resolver = require_keymap_resolver(context)

    def on_exit(self, next_mode: EditorMode | None) -> None:
        del next_mode
        buffer = self.context.buffer
        buffer.state.set_cursor(
            *clamp_cursor(buffer.document, buffer.state.cursor, allow_past_end=False)
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self._resolver.resolve(self.name, (key_to_token(key),))
        if result.status == "match" and result.match:
            return execute_match(self.context, result.match)

        text = key.printable
        if text is None:
            return ModeResult(consumed=False, status="miss")

        self.context.buffer.insert_text(text)
        return ModeResult(consumed=True, status="insert_text")
