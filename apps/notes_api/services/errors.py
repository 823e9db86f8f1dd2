"""Иерархия ошибок слоя заметок."""
# --- Imports ---
from __future__ import annotations


# --- Models / Classes ---
class NotesError(Exception):
    """Base class for note-layer failures."""


class KeyValueStoreError(NotesError):
    """Raised by a key-value backend when a get/set call fails."""


class StorageReadError(NotesError):
    def __init__(self, key: str, message: str = "failed to read from storage") -> None:
        super().__init__(f"{message} (key={key})")
        self.key = key


class StorageWriteError(NotesError):
    def __init__(self, key: str, message: str = "failed to write to storage") -> None:
        super().__init__(f"{message} (key={key})")
        self.key = key


class EditorStateError(NotesError):
    """Действие недопустимо в текущем состоянии редактора."""
