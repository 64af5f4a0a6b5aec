"""File I/O collaborator used at startup and by ``:w``."""

from .files import (
    FileStore,
    LoadedFile,
    StorageError,
    StorageIOError,
    StorageNotFoundError,
    StoragePermissionError,
)

__all__ = [
    "FileStore",
    "LoadedFile",
    "StorageError",
    "StorageIOError",
    "StorageNotFoundError",
    "StoragePermissionError",
]
