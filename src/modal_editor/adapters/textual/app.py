"""Executable Textual app that hosts the modal editor."""

from __future__ import annotations

import argparse
import shutil
import sys
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the editor is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widget import Widget
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use modal_editor.adapters.textual.app"
    ) from exc

from modal_editor.config import CursorShape, load_settings
from modal_editor.render import RenderPlan, ScreenGrid
from modal_editor.runtime import telemetry
from modal_editor.runtime.session import EditorSession
from modal_editor.storage import StorageError

from .controller import HOST_KEY_NAMES, TextualEditorAdapter, TextualUIHooks

CURSOR_STYLES = {
    CursorShape.BLOCK: "reverse",
    CursorShape.BAR: "underline",
}


class EditorView(Widget, can_focus=True):
    """Paints a ScreenGrid, highlighting the cursor cell by shape."""

    def __init__(self, rows: int, cols: int) -> None:
        super().__init__(id="editor-view")
        self.grid = ScreenGrid(rows, cols)

    def apply_plan(self, plan: RenderPlan) -> None:
        self.grid.apply(plan)
        self.refresh()

    def render(self) -> Text:
        grid = self.grid
        cursor_row, cursor_col = grid.cursor
        cursor_style = CURSOR_STYLES[grid.cursor_shape]
        result = Text(no_wrap=True, overflow="crop")
        for row in range(grid.rows):
            line = grid.row_text(row)
            if row == cursor_row and 0 <= cursor_col < grid.cols:
                result.append(line[:cursor_col])
                result.append(line[cursor_col], style=cursor_style)
                result.append(line[cursor_col + 1 :])
            else:
                result.append(line)
            if row < grid.rows - 1:
                result.append("\n")
        return result

    def on_key(self, event: events.Key) -> None:
        normalized = _normalize_key(event)
        if normalized is None:
            return
        event.prevent_default()
        event.stop()
        app = self.app
        if isinstance(app, ModalEditorApp):
            app.dispatch_key(*normalized)

    def on_resize(self, event: events.Resize) -> None:
        app = self.app
        if isinstance(app, ModalEditorApp):
            app.resize_editor(event.size.height, event.size.width)


class ModalEditorApp(App[int]):
    """Full-screen host: one EditorView, no chrome."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor-view {
		height: 1fr;
		width: 1fr;
	}
	"""

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualEditorAdapter | None = None
        self.status_text = ""
        viewport = session.planner.viewport
        self._view = EditorView(viewport.rows, viewport.cols)
        self._logger = telemetry.get_logger("modal_editor.textual")

    def compose(self) -> ComposeResult:
        yield self._view

    def on_mount(self) -> None:
        size = self._view.size
        if size.height > 0 and size.width > 0:
            self._view.grid.resize(size.height, size.width)
            self.session.resize(size.height, size.width)
        hooks = TextualUIHooks(
            apply_plan=self._view.apply_plan,
            update_status=self._update_status,
            request_exit=self._request_exit,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        self._view.focus()

    def dispatch_key(
        self, key: str, text: Optional[str], modifiers: Tuple[str, ...]
    ) -> None:
        if self.adapter is None:
            return
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)

    def resize_editor(self, rows: int, cols: int) -> None:
        if rows < 1 or cols < 1:
            return
        self._view.grid.resize(rows, cols)
        if self.adapter is None:
            self.session.resize(rows, cols)
            return
        self.adapter.resize(rows, cols)

    def _update_status(self, status: str) -> None:
        self.status_text = status

    def _request_exit(self) -> None:
        self.exit(0)

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)


def _normalize_key(
    event: events.Key,
) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
    key = event.key
    if key == "ctrl+q":
        return None
    character = event.character if event.is_printable else None
    modifiers: list[str] = []
    if key.startswith("ctrl+") and key not in HOST_KEY_NAMES:
        modifiers.append("CTRL")
        key = key[len("ctrl+") :]
        character = None
    return key, character, tuple(modifiers)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="modal-editor", description="Modal terminal text editor."
    )
    parser.add_argument("filename", nargs="?", help="File to open or create")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    size = shutil.get_terminal_size()
    try:
        telemetry.configure()
        settings = load_settings()
        session = EditorSession.open(
            args.filename,
            rows=max(size.lines, 2),
            cols=max(size.columns, 1),
            settings=settings,
        )
    except StorageError as exc:
        print(f"modal-editor: {exc.path}: {exc.reason}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"modal-editor: {exc}", file=sys.stderr)
        return 1
    app = ModalEditorApp(session)
    app.run()
    return app.return_code or 0


if __name__ == "__main__":  # pragma: no cover - manual run
    sys.exit(main())
