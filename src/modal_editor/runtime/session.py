"""Editor session: the one object owning buffer, modes, renderer and quit state."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from modal_editor.buffer import Buffer, ensure_cursor
from modal_editor.config import EditorSettings
from modal_editor.modes import (
    CommandMode,
    EditorMode,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeResult,
    NormalMode,
)
from modal_editor.modes.mode_manager import ModeManager
from modal_editor.render import Frame, RenderPlan, RenderPlanner
from modal_editor.storage import FileStore, StorageNotFoundError

from . import telemetry

DEFAULT_ROWS = 24
DEFAULT_COLS = 80
SESSION_LOGGER = "modal_editor.session"


def create_manager(context: ModeContext) -> ModeManager:
    """Build a ModeManager with the standard mode set + default keymaps."""

    manager = ModeManager(context)
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    manager.register_mode(CommandMode)
    return manager


class EditorSession:
    """Explicit editor context; several sessions may coexist in one process."""

    def __init__(
        self,
        buffer: Buffer | None = None,
        *,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        storage: FileStore | None = None,
        settings: EditorSettings | None = None,
    ) -> None:
        self.settings = settings or EditorSettings()
        self.storage = storage or FileStore(self.settings)
        self.bus = ModeBus()
        self.context = ModeContext(
            buffer=buffer or Buffer(),
            bus=self.bus,
            storage=self.storage,
            settings=self.settings,
        )
        self.manager = create_manager(self.context)
        self.planner = RenderPlanner(rows, cols, settings=self.settings)
        self.message: Optional[str] = None
        self.message_error = False
        self.should_quit = False
        self.bus.subscribe("command.quit", self._on_quit)

    @classmethod
    def open(
        cls,
        filename: Optional[str] = None,
        *,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        storage: FileStore | None = None,
        settings: EditorSettings | None = None,
    ) -> "EditorSession":
        """Start a session on ``filename``.

        A missing file opens an empty buffer under that name. Any other
        ``StorageError`` propagates to the caller.
        """

        settings = settings or EditorSettings()
        storage = storage or FileStore(settings)
        message: Optional[str] = None
        if filename is None:
            buffer = Buffer()
        else:
            try:
                loaded = storage.read(filename)
            except StorageNotFoundError:
                buffer = Buffer(filename=filename)
                message = f'"{buffer.display_name}" [New]'
            else:
                buffer = Buffer.from_lines(
                    loaded.lines,
                    filename=filename,
                    final_newline=loaded.final_newline,
                )
                message = (
                    f'"{buffer.display_name}" {len(loaded.lines)}L, '
                    f"{loaded.byte_count}B"
                )
        session = cls(buffer, rows=rows, cols=cols, storage=storage, settings=settings)
        session.message = message
        telemetry.record_event(
            "session.open",
            logger_name=SESSION_LOGGER,
            data={"filename": filename or "", "lines": buffer.document.line_count},
        )
        return session

    @property
    def buffer(self) -> Buffer:
        return self.context.buffer

    @property
    def mode(self) -> EditorMode:
        return self.manager.mode

    @property
    def command_text(self) -> str:
        state = self.context.extras.get("command_state")
        if isinstance(state, dict):
            return str(state.get("text", ""))
        return ""

    def handle_key(self, key: KeyInput) -> ModeResult:
        """Dispatch one key and refresh the transient status message."""

        self.message = None
        self.message_error = False
        result = self.manager.handle_key(key)
        if result.message:
            self.message = result.message
            self.message_error = result.error
        if result.error:
            telemetry.record_event(
                "session.command_error",
                logger_name=SESSION_LOGGER,
                level="warning",
                data={"message": result.message or result.status},
            )
        ensure_cursor(
            self.buffer.document,
            self.buffer.state.cursor,
            allow_past_end=self.mode.allows_past_end,
        )
        return result

    def resize(self, rows: int, cols: int) -> None:
        self.planner.resize(rows, cols)

    def frame(self) -> Frame:
        buffer = self.buffer
        return Frame(
            lines=tuple(buffer.document.snapshot()),
            cursor=buffer.state.cursor,
            mode=self.mode,
            command_text=self.command_text,
            message=self.message,
            message_error=self.message_error,
            filename=buffer.filename,
            modified=buffer.modified,
        )

    def render(self, *, force: bool = False) -> RenderPlan:
        return self.planner.plan(self.frame(), force=force)

    def _on_quit(self, payload: object | None) -> None:
        del payload
        self.should_quit = True


def run_session(
    session: EditorSession,
    keys: Iterable[KeyInput],
    sink: Callable[[RenderPlan], None],
) -> EditorSession:
    """Feed ``keys`` one at a time, rendering after each, until quit or exhaustion."""

    sink(session.render())
    for key in keys:
        session.handle_key(key)
        if session.should_quit:
            break
        sink(session.render())
    return session


__all__ = ["EditorSession", "create_manager", "run_session"]
