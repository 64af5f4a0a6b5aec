"""Cursor motion actions backed by the pure motion engine."""

from __future__ import annotations

from modal_editor.modes.base_mode import EditorMode, ModeContext, ModeResult
from modal_editor.motions import Motion, apply_motion


def move_cursor(context: ModeContext, match, *, motion: Motion) -> ModeResult:
    """Apply ``motion`` using the column range of the binding's mode."""

    allow_past_end = EditorMode(match.binding.mode).allows_past_end
    buffer = context.buffer
    before = buffer.state.cursor
    after = apply_motion(
        buffer.document, before, motion, allow_past_end=allow_past_end
    )
    buffer.state.set_cursor(*after)
    status = "motion" if after != before else "motion_blocked"
    return ModeResult(consumed=True, status=status)


__all__ = ["move_cursor"]
