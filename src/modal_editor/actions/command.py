"""Actions that evaluate Ex-style command lines (``:w``, ``:q``, ``:wq``)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, MutableMapping, Optional, cast

from modal_editor.modes.base_mode import EditorMode, ModeContext, ModeResult
from modal_editor.runtime import telemetry
from modal_editor.storage import StorageError

_COMMAND_RE = re.compile(r"^(?P<name>[A-Za-z]*)(?P<force>!?)(?P<rest>.*)$", re.DOTALL)


@dataclass(frozen=True, slots=True)
class ParsedCommand:
    """A command line split into its name, force flag and argument."""

    name: str
    force: bool = False
    argument: str = ""


CommandHandler = Callable[[ModeContext, ParsedCommand], ModeResult]


def parse_command(text: str) -> ParsedCommand:
    """Split ``text`` into a command token, a ``!`` flag and the argument.

    The token is the leading run of letters; everything after an optional
    ``!`` is stripped and kept whole so file names may contain spaces.
    """

    stripped = text.strip()
    match = _COMMAND_RE.match(stripped)
    if match is None or not match.group("name"):
        # Non-letter commands (``:!ls``, ``:1``) stay whole for error reporting.
        return ParsedCommand(name=stripped)
    return ParsedCommand(
        name=match.group("name"),
        force=bool(match.group("force")),
        argument=match.group("rest").strip(),
    )


def _command_state(context: ModeContext) -> MutableMapping[str, object]:
    state = cast(
        MutableMapping[str, object], context.extras.setdefault("command_state", {})
    )
    state.setdefault("text", "")
    state.setdefault("history", [])
    return state


def submit_command_line(context: ModeContext, match) -> ModeResult:
    del match
    state = _command_state(context)
    text = str(state.get("text", "")).strip()
    context.bus.emit("command.submit", text)
    history = state.get("history")
    if isinstance(history, list) and text:
        history.append(text)
    state["text"] = ""
    if not text:
        return ModeResult(
            consumed=True, switch_to=EditorMode.NORMAL, status="command_empty"
        )
    return execute_command(context, text)


def execute_command(context: ModeContext, text: str) -> ModeResult:
    """Run one command line against ``context`` and describe the outcome."""

    parsed = parse_command(text)
    handler = _COMMAND_HANDLERS.get(parsed.name)
    telemetry.record_event(
        "command.execute",
        data={"command": parsed.name, "force": parsed.force, "known": handler is not None},
    )
    if handler is None:
        return _unknown_command(context, text.strip())
    return handler(context, parsed)


def _error(message: str) -> ModeResult:
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_error",
        message=message,
        error=True,
    )


def _unknown_command(context: ModeContext, text: str) -> ModeResult:
    context.bus.emit("command.error", text)
    return _error(f"E492: Not an editor command: {text}")


def _write_buffer(context: ModeContext, argument: str) -> tuple[Optional[str], ModeResult]:
    """Write the buffer, returning the written path (or ``None``) and the result."""

    buffer = context.buffer
    target = argument or buffer.filename
    if not target:
        return None, _error("E32: No file name")
    if context.storage is None:
        return None, _error(f"E212: Can't open file for writing: {target}")
    lines = buffer.document.snapshot()
    try:
        written = context.storage.write_lines(
            target, lines, final_newline=buffer.final_newline
        )
    except StorageError as exc:
        return None, _error(f"E212: Can't open file for writing: {exc.reason}")
    buffer.mark_saved(target)
    context.bus.emit(
        "command.write", {"filename": target, "lines": len(lines), "bytes": written}
    )
    message = f'"{buffer.display_name}" {len(lines)}L, {written}B written'
    return target, ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_write",
        message=message,
    )


def _quit(context: ModeContext, *, force: bool) -> ModeResult:
    if context.buffer.modified and not force:
        return _error("E37: No write since last change (add ! to override)")
    context.bus.emit("command.quit", {"force": force})
    status = "command_quit_force" if force else "command_quit"
    return ModeResult(consumed=True, switch_to=EditorMode.NORMAL, status=status)


def _handle_write(context: ModeContext, command: ParsedCommand) -> ModeResult:
    _, result = _write_buffer(context, command.argument)
    return result


def _handle_quit(context: ModeContext, command: ParsedCommand) -> ModeResult:
    if command.argument:
        return _error("E488: Trailing characters")
    return _quit(context, force=command.force)


def _handle_wq(context: ModeContext, command: ParsedCommand) -> ModeResult:
    target, result = _write_buffer(context, command.argument)
    if target is None:
        return result
    quit_result = _quit(context, force=command.force)
    if quit_result.error:
        return quit_result
    quit_result.message = result.message
    return quit_result


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "w": _handle_write,
    "write": _handle_write,
    "q": _handle_quit,
    "quit": _handle_quit,
    "wq": _handle_wq,
}


__all__ = ["ParsedCommand", "parse_command", "submit_command_line", "execute_command"]
