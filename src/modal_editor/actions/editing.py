"""Text-mutating actions: ``x``, ``dd`` and the Insert-mode editing keys."""

from __future__ import annotations

from modal_editor.modes.base_mode import ModeContext, ModeResult
from modal_editor.motions import clamp_cursor


def _clamp_to_normal(context: ModeContext) -> None:
    buffer = context.buffer
    buffer.state.set_cursor(
        *clamp_cursor(buffer.document, buffer.state.cursor, allow_past_end=False)
    )


def delete_char_under_cursor(context: ModeContext, match) -> ModeResult:
    del match
    removed = context.buffer.delete_char_under_cursor()
    if removed is None:
        return ModeResult(consumed=True, status="noop")
    _clamp_to_normal(context)
    context.bus.emit("edit.delete_char", removed)
    return ModeResult(consumed=True, status="delete_char")


def delete_line(context: ModeContext, match) -> ModeResult:
    del match
    removed = context.buffer.delete_current_line()
    _clamp_to_normal(context)
    context.bus.emit("edit.delete_line", removed)
    return ModeResult(consumed=True, status="delete_line")


def split_line(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.split_line()
    return ModeResult(consumed=True, status="split_line")


def backspace(context: ModeContext, match) -> ModeResult:
    del match
    if not context.buffer.backspace():
        return ModeResult(consumed=True, status="noop")
    return ModeResult(consumed=True, status="backspace")


def insert_tab(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.insert_text("\t")
    return ModeResult(consumed=True, status="insert_text")


__all__ = [
    "delete_char_under_cursor",
    "delete_line",
    "split_line",
    "backspace",
    "insert_tab",
]
