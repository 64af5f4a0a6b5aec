"""Mode-transition actions shared across modes."""

from __future__ import annotations

from modal_editor.modes.base_mode import EditorMode, ModeContext, ModeResult


def enter_insert_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, status="enter_insert")


def append_after_cursor(context: ModeContext, match) -> ModeResult:
    """``a``: step past the character under the cursor, then insert."""

    del match
    state = context.buffer.state
    row, col = state.cursor
    line = context.buffer.document.get_line(row)
    state.set_cursor(row, min(col + 1, len(line)))
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, status="enter_insert")


def append_at_line_end(context: ModeContext, match) -> ModeResult:
    del match
    row, _ = context.buffer.state.cursor
    context.buffer.state.set_cursor(row, len(context.buffer.document.get_line(row)))
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, status="enter_insert")


def insert_at_line_start(context: ModeContext, match) -> ModeResult:
    del match
    row, _ = context.buffer.state.cursor
    context.buffer.state.set_cursor(row, 0)
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, status="enter_insert")


def open_line_below(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.open_line(below=True)
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, status="open_line")


def open_line_above(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.open_line(below=False)
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, status="open_line")


def exit_to_normal_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=EditorMode.NORMAL, status="exit_to_normal")


def enter_command_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(
        consumed=True, switch_to=EditorMode.COMMAND, status="enter_command"
    )


def noop_action(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, status="noop")


__all__ = [
    "enter_insert_mode",
    "append_after_cursor",
    "append_at_line_end",
    "insert_at_line_start",
    "open_line_below",
    "open_line_above",
    "exit_to_normal_mode",
    "enter_command_mode",
    "noop_action",
]
