"""Normal mode: motions and edit commands resolved through the keymap trie."""

from __future__ import annotations

from typing import List

from modal_editor.motions import clamp_cursor
from modal_editor.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, key_to_token, require_keymap_resolver


class NormalMode(Mode):
    """Interprets keys as motions or edits.

    Multi-key commands (``dd``, ``gg``, ``ge``) hold their first key in
    ``_pending``. The next key either completes a binding or cancels the
    prefix without running anything.
    """

    name = EditorMode.NORMAL

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("modal_editor.modes.normal")
        self._resolver = require_keymap_resolver(context)
        self._pending: List[str] = []

    @property
    def pending_keys(self) -> str:
        return "".join(self._pending)

    def on_enter(self, previous: EditorMode | None) -> None:
        del previous
        self._pending.clear()
        buffer = self.context.buffer
        buffer.state.set_cursor(
            *clamp_cursor(buffer.document, buffer.state.cursor, allow_past_end=False)
        )

    def on_exit(self, next_mode: EditorMode | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        self._pending.append(key_to_token(key))
        result = self._resolver.resolve(self.name, tuple(self._pending))

        if result.status == "match" and result.match:
            self._pending.clear()
            return execute_match(self.context, result.match)

        if result.status == "pending":
            return ModeResult(consumed=True, status="pending")

        had_prefix = len(self._pending) > 1
        self._pending.clear()
        if had_prefix:
            return ModeResult(consumed=True, status="cancelled")
        return ModeResult(consumed=False, status="miss")
