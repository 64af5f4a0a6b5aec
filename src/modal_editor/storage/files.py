"""Whole-file reads and writes with editor-level error types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from modal_editor.buffer import BufferDocument
from modal_editor.config import EditorSettings
from modal_editor.runtime import telemetry

STORAGE_LOGGER = "modal_editor.storage"


class StorageError(RuntimeError):
    """Base error for file reads and writes; ``reason`` is user-facing."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class StorageNotFoundError(StorageError):
    pass


class StoragePermissionError(StorageError):
    pass


class StorageIOError(StorageError):
    pass


def _translate(path: str, exc: BaseException) -> StorageError:
    if isinstance(exc, FileNotFoundError):
        return StorageNotFoundError(path, "No such file or directory")
    if isinstance(exc, PermissionError):
        return StoragePermissionError(path, "Permission denied")
    if isinstance(exc, IsADirectoryError):
        return StorageIOError(path, "Is a directory")
    if isinstance(exc, UnicodeError):
        reason = getattr(exc, "reason", str(exc))
        return StorageIOError(path, f"Cannot decode or encode text: {reason}")
    if isinstance(exc, OSError):
        return StorageIOError(path, exc.strerror or str(exc))
    return StorageIOError(path, str(exc))


@dataclass(frozen=True)
class LoadedFile:
    """File contents as lines; ``final_newline`` records a terminating line break."""

    lines: list[str]
    byte_count: int
    final_newline: bool = False


class FileStore:
    """Reads files into lines and writes lines back using the editor settings."""

    def __init__(self, settings: EditorSettings | None = None) -> None:
        self.settings = settings or EditorSettings()

    def read_lines(self, path: str) -> list[str]:
        return self.read(path).lines

    def read(self, path: str) -> LoadedFile:
        with telemetry.span(
            "storage::read",
            logger_name=STORAGE_LOGGER,
            component="storage",
            metadata={"path": path},
        ) as handle:
            try:
                with open(path, "rb") as fh:
                    data = fh.read()
                text = data.decode(self.settings.encoding)
            except (OSError, UnicodeError) as exc:
                error = _translate(path, exc)
                handle.add_metadata("error", error.reason)
                raise error from exc
            lines = list(BufferDocument.from_text(text).snapshot())
            final_newline = len(lines) > 1 and lines[-1] == ""
            if final_newline:
                lines.pop()
            handle.add_metadata("lines", len(lines))
            return LoadedFile(
                lines=lines, byte_count=len(data), final_newline=final_newline
            )

    def write_lines(
        self, path: str, lines: Sequence[str], *, final_newline: bool = False
    ) -> int:
        """Write ``lines`` joined by the configured line break; return bytes written.

        With ``final_newline`` the last line is terminated as well.
        """

        line_ending = self.settings.line_ending
        payload = line_ending.join(lines)
        if final_newline:
            payload += line_ending
        with telemetry.span(
            "storage::write",
            logger_name=STORAGE_LOGGER,
            component="storage",
            metadata={"path": path},
        ) as handle:
            try:
                data = payload.encode(self.settings.encoding)
                with open(path, "wb") as fh:
                    fh.write(data)
            except FileNotFoundError as exc:
                error = StorageIOError(path, "No such directory")
                handle.add_metadata("error", error.reason)
                raise error from exc
            except (OSError, UnicodeError) as exc:
                error = _translate(path, exc)
                handle.add_metadata("error", error.reason)
                raise error from exc
            handle.add_metadata("bytes", len(data))
            return len(data)


__all__ = [
    "FileStore",
    "LoadedFile",
    "StorageError",
    "StorageNotFoundError",
    "StoragePermissionError",
    "StorageIOError",
]
