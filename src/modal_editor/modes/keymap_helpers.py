"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import MutableMapping, cast

from modal_editor.keymaps import KeymapResolver, ResolutionMatch
from modal_editor.runtime import telemetry

from .base_mode import KeyInput, ModeContext, ModeResult


def key_to_token(key: KeyInput) -> str:
    if key.modifiers:
        modifier = "+".join(sorted({mod.upper() for mod in key.modifiers}))
        return f"{modifier}+{key.key}"
    return key.key


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def command_state(context: ModeContext) -> MutableMapping[str, object]:
    state = cast(
        MutableMapping[str, object], context.extras.setdefault("command_state", {})
    )
    state.setdefault("text", "")
    return state


def execute_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={"binding_id": match.binding.id, "action": match.action.id},
    ):
        outcome = match.action(context, match)

    if isinstance(outcome, ModeResult):
        return outcome
    return ModeResult(consumed=True)


__all__ = [
    "key_to_token",
    "require_keymap_resolver",
    "command_state",
    "execute_match",
]
