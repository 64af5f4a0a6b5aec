from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pytest

from modal_editor.buffer import Buffer
from modal_editor.config import EditorSettings
from modal_editor.modes import EditorMode, KeyInput
from modal_editor.render import RenderPlan, ScreenGrid
from modal_editor.runtime.session import EditorSession, run_session
from modal_editor.storage import FileStore, StoragePermissionError


def make_keys(*keys: str) -> List[KeyInput]:
    return [KeyInput.char(key) if len(key) == 1 else KeyInput(key=key) for key in keys]


def type_text(text: str) -> Iterable[KeyInput]:
    return [KeyInput.char(char) for char in text]


def make_session(tmp_path: Path, *lines: str, name: str = "file.txt") -> EditorSession:
    path = tmp_path / name
    if lines:
        path.write_text("\n".join(lines))
    settings = EditorSettings(line_ending="\n")
    return EditorSession.open(
        str(path), rows=5, cols=30, storage=FileStore(settings), settings=settings
    )


def test_open_existing_file_reports_size(tmp_path: Path) -> None:
    session = make_session(tmp_path, "one", "two")

    assert session.buffer.document.snapshot() == ("one", "two")
    assert session.message == '"file.txt" 2L, 7B'
    assert session.mode is EditorMode.NORMAL
    assert session.buffer.modified is False


def test_open_missing_file_starts_empty(tmp_path: Path) -> None:
    session = make_session(tmp_path, name="new.txt")

    assert session.buffer.document.snapshot() == ("",)
    assert session.buffer.filename == str(tmp_path / "new.txt")
    assert session.message == '"new.txt" [New]'


def test_open_without_filename() -> None:
    session = EditorSession.open(None, rows=5, cols=30)

    assert session.buffer.filename is None
    assert session.message is None


def test_open_propagates_other_storage_errors(tmp_path: Path) -> None:
    class DeniedStore(FileStore):
        def read(self, path: str):
            raise StoragePermissionError(path, "Permission denied")

    with pytest.raises(StoragePermissionError):
        EditorSession.open(str(tmp_path / "x"), storage=DeniedStore())


def test_quit_with_pending_edits_then_force(tmp_path: Path) -> None:
    session = make_session(tmp_path, "text")
    plans: List[RenderPlan] = []
    keys = make_keys("x", ":", "q", "ENTER")

    run_session(session, keys, plans.append)

    assert session.should_quit is False
    assert session.mode is EditorMode.NORMAL
    assert session.message == "E37: No write since last change (add ! to override)"
    assert session.message_error is True

    run_session(session, make_keys(":", "q", "!", "ENTER"), plans.append)

    assert session.should_quit is True


def test_edit_write_quit_round_trip(tmp_path: Path) -> None:
    session = make_session(tmp_path, "hello")
    grid = ScreenGrid(5, 30)
    keys = [
        *make_keys("A"),
        *type_text(" world"),
        *make_keys("ENTER"),
        *type_text("bye"),
        *make_keys("ESC", ":", "w", "q", "ENTER"),
    ]

    run_session(session, keys, grid.apply)

    assert session.should_quit is True
    assert (tmp_path / "file.txt").read_text() == "hello world\nbye"


def test_loop_stops_at_quit_and_ignores_remaining_keys(tmp_path: Path) -> None:
    session = make_session(tmp_path, "abc")
    keys = make_keys(":", "q", "ENTER", "d", "d")

    run_session(session, keys, lambda plan: None)

    assert session.buffer.document.snapshot() == ("abc",)


def test_status_message_clears_on_next_key(tmp_path: Path) -> None:
    session = make_session(tmp_path, "abc")
    grid = ScreenGrid(5, 30)

    run_session(session, make_keys(":", "n", "o", "p", "ENTER"), grid.apply)
    assert grid.lines()[4].startswith("E492: Not an editor")

    run_session(session, make_keys("l"), grid.apply)
    assert session.message is None
    assert not grid.lines()[4].startswith("E492")


def test_screen_shows_file_after_open(tmp_path: Path) -> None:
    session = make_session(tmp_path, "first", "second")
    grid = ScreenGrid(5, 30)

    run_session(session, [], grid.apply)

    assert grid.lines()[:4] == ["first", "second", "~", "~"]
    assert grid.lines()[4].startswith('"file.txt" 2L, 12B')


def test_sessions_are_independent() -> None:
    first = EditorSession(Buffer.from_lines(["a"]))
    second = EditorSession(Buffer.from_lines(["b"]))

    first.handle_key(KeyInput.char("x"))

    assert first.buffer.document.snapshot() == ("",)
    assert second.buffer.document.snapshot() == ("b",)
    assert second.buffer.modified is False


def test_write_without_edits_keeps_file_bytes(tmp_path: Path) -> None:
    path = tmp_path / "source.c"
    original = "int a;\x0c\nint b;\u2028x\n".encode("utf-8")
    path.write_bytes(original)
    settings = EditorSettings(line_ending="\n")
    session = EditorSession.open(
        str(path), rows=5, cols=30, storage=FileStore(settings), settings=settings
    )

    run_session(session, make_keys(":", "w", "ENTER"), lambda plan: None)

    assert session.message_error is False
    assert path.read_bytes() == original


def test_trailing_newline_is_not_a_line(tmp_path: Path) -> None:
    path = tmp_path / "file.txt"
    path.write_text("a\nb\n")
    settings = EditorSettings(line_ending="\n")
    session = EditorSession.open(
        str(path), rows=5, cols=30, storage=FileStore(settings), settings=settings
    )

    assert session.message == '"file.txt" 2L, 4B'
    assert session.buffer.document.snapshot() == ("a", "b")

    run_session(session, make_keys("G", "x", ":", "w", "ENTER"), lambda plan: None)

    assert session.buffer.state.cursor == (1, 0)
    assert path.read_text() == "a\n\n"
