"""Пакетный модуль для `apps/notes_api/services`."""

# --- Imports ---
from .editor import NoteEditor
from .editor_state import EditorState
from .kv_store import InMemoryKeyValueStore, KeyValueStore, SQLiteKeyValueStore
from .note_repository import NoteRepository
from .state import NotesAppState, build_state
from .theme import ThemePreference

__all__ = [
    "EditorState",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "NoteEditor",
    "NoteRepository",
    "NotesAppState",
    "SQLiteKeyValueStore",
    "ThemePreference",
    "build_state",
]
