"""High-level editing verbs bound to keys by the default keymaps."""

from .core import (
    append_after_cursor,
    append_at_line_end,
    enter_command_mode,
    enter_insert_mode,
    exit_to_normal_mode,
    insert_at_line_start,
    noop_action,
    open_line_above,
    open_line_below,
)
from .editing import (
    backspace,
    delete_char_under_cursor,
    delete_line,
    insert_tab,
    split_line,
)
from .motion import move_cursor
from .command import ParsedCommand, execute_command, parse_command, submit_command_line

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
    "delete_char_under_cursor",
    "delete_line",
    "split_line",
    "backspace",
    "insert_tab",
    "move_cursor",
    "ParsedCommand",
    "parse_command",
    "execute_command",
    "submit_command_line",
]
