"""Built-in keymaps that seed each mode with the editor's default bindings."""

from __future__ import annotations

from functools import partial
from typing import Sequence

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

_MOTION_ACTIONS: tuple[tuple[str, str, str], ...] = (
    ("motion.left", "LEFT", "Move left"),
    ("motion.right", "RIGHT", "Move right"),
    ("motion.up", "UP", "Move up"),
    ("motion.down", "DOWN", "Move down"),
    ("motion.word_forward_start", "WORD_FORWARD_START", "Next word start"),
    ("motion.word_forward_end", "WORD_FORWARD_END", "Next word end"),
    ("motion.word_backward_start", "WORD_BACKWARD_START", "Previous word start"),
    ("motion.word_backward_end", "WORD_BACKWARD_END", "Previous word end"),
    ("motion.line_start", "LINE_START", "Start of line"),
    ("motion.line_end", "LINE_END", "End of line"),
    ("motion.buffer_first_line", "BUFFER_FIRST_LINE", "First line"),
    ("motion.buffer_last_line", "BUFFER_LAST_LINE", "Last line"),
)


def default_actions() -> tuple[ActionRef, ...]:
    """Build the built-in actions.

    Action handlers import the mode types, so they are loaded on demand.
    """

    from modal_editor.actions import command as command_actions
    from modal_editor.actions import core as core_actions
    from modal_editor.actions import editing as editing_actions
    from modal_editor.actions import motion as motion_actions
    from modal_editor.motions import Motion

    actions = [
        ActionRef(
            id="core.enter_insert",
            handler=core_actions.enter_insert_mode,
            description="Insert before the cursor",
        ),
        ActionRef(
            id="core.append",
            handler=core_actions.append_after_cursor,
            description="Insert after the cursor",
        ),
        ActionRef(
            id="core.append_line_end",
            handler=core_actions.append_at_line_end,
            description="Insert at the end of the line",
        ),
        ActionRef(
            id="core.insert_line_start",
            handler=core_actions.insert_at_line_start,
            description="Insert at the start of the line",
        ),
        ActionRef(
            id="core.open_below",
            handler=core_actions.open_line_below,
            description="Open a line below",
        ),
        ActionRef(
            id="core.open_above",
            handler=core_actions.open_line_above,
            description="Open a line above",
        ),
        ActionRef(
            id="core.enter_command",
            handler=core_actions.enter_command_mode,
            description="Enter command-line mode",
        ),
        ActionRef(
            id="core.exit_to_normal",
            handler=core_actions.exit_to_normal_mode,
            description="Return to normal mode",
        ),
        ActionRef(
            id="edit.delete_char",
            handler=editing_actions.delete_char_under_cursor,
            description="Delete the character under the cursor",
        ),
        ActionRef(
            id="edit.delete_line",
            handler=editing_actions.delete_line,
            description="Delete the current line",
        ),
        ActionRef(
            id="edit.split_line",
            handler=editing_actions.split_line,
            description="Break the line at the cursor",
        ),
        ActionRef(
            id="edit.backspace",
            handler=editing_actions.backspace,
            description="Delete before the cursor",
        ),
        ActionRef(
            id="edit.insert_tab",
            handler=editing_actions.insert_tab,
            description="Insert a tab character",
        ),
        ActionRef(
            id="command.submit_line",
            handler=command_actions.submit_command_line,
            description="Evaluate the active command line",
        ),
    ]
    for action_id, motion_name, description in _MOTION_ACTIONS:
        actions.append(
            ActionRef(
                id=action_id,
                handler=partial(motion_actions.move_cursor, motion=Motion[motion_name]),
                description=description,
                metadata={"motion": motion_name},
            )
        )
    return tuple(actions)


def _bind(mode: str, keys: Sequence[str], action_id: str, description: str = "") -> Binding:
    return Binding(
        id=f"{mode}.{'_'.join(keys)}",
        mode=mode,
        sequence=KeySequence.from_strings(*keys),
        action_id=action_id,
        description=description,
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("normal", ("h",), "motion.left"),
    _bind("normal", ("LEFT",), "motion.left"),
    _bind("normal", ("l",), "motion.right"),
    _bind("normal", ("RIGHT",), "motion.right"),
    _bind("normal", ("k",), "motion.up"),
    _bind("normal", ("UP",), "motion.up"),
    _bind("normal", ("j",), "motion.down"),
    _bind("normal", ("DOWN",), "motion.down"),
    _bind("normal", ("w",), "motion.word_forward_start"),
    _bind("normal", ("e",), "motion.word_forward_end"),
    _bind("normal", ("b",), "motion.word_backward_start"),
    _bind("normal", ("g", "e"), "motion.word_backward_end"),
    _bind("normal", ("0",), "motion.line_start"),
    _bind("normal", ("HOME",), "motion.line_start"),
    _bind("normal", ("$",), "motion.line_end"),
    _bind("normal", ("END",), "motion.line_end"),
    _bind("normal", ("g", "g"), "motion.buffer_first_line"),
    _bind("normal", ("G",), "motion.buffer_last_line"),
    _bind("normal", ("x",), "edit.delete_char"),
    _bind("normal", ("d", "d"), "edit.delete_line"),
    _bind("normal", ("i",), "core.enter_insert"),
    _bind("normal", ("a",), "core.append"),
    _bind("normal", ("I",), "core.insert_line_start"),
    _bind("normal", ("A",), "core.append_line_end"),
    _bind("normal", ("o",), "core.open_below"),
    _bind("normal", ("O",), "core.open_above"),
    _bind("normal", (":",), "core.enter_command"),
    _bind("insert", ("ESC",), "core.exit_to_normal", "Leave insert mode"),
    _bind("insert", ("ENTER",), "edit.split_line"),
    _bind("insert", ("BACKSPACE",), "edit.backspace"),
    _bind("insert", ("TAB",), "edit.insert_tab"),
    _bind("insert", ("LEFT",), "motion.left"),
    _bind("insert", ("RIGHT",), "motion.right"),
    _bind("insert", ("UP",), "motion.up"),
    _bind("insert", ("DOWN",), "motion.down"),
    _bind("insert", ("HOME",), "motion.line_start"),
    _bind("insert", ("END",), "motion.line_end"),
    _bind("command", ("ESC",), "core.exit_to_normal", "Cancel command line"),
    _bind("command", ("ENTER",), "command.submit_line", "Submit the command line"),
)


def load_default_keymaps(registry: KeymapRegistry) -> None:
    """Register the built-in actions and bindings for every mode."""

    for action in default_actions():
        registry.register_action(action)
    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding)


__all__ = ["load_default_keymaps", "default_actions", "DEFAULT_BINDINGS"]
