"""Контейнер состояния процесса: хранилище, репозиторий, тема, редактор."""
# --- Imports ---
from __future__ import annotations

import logging

from ..config import STORAGE_BACKEND, STORE_DB_PATH
from .editor import NoteEditor
from .kv_store import InMemoryKeyValueStore, KeyValueStore, SQLiteKeyValueStore
from .note_repository import NoteRepository
from .theme import ThemePreference

logger = logging.getLogger(__name__)


# --- Models / Classes ---
class NotesAppState:
    """Создаётся один раз на процесс; ``init()`` выполняет первичную загрузку."""

    def __init__(self, kv_store: KeyValueStore) -> None:
        self.kv_store = kv_store
        self.repository = NoteRepository(kv_store)
        self.theme = ThemePreference(kv_store)
        self.editor = NoteEditor(self.repository)
        self._ready = False

    async def init(self) -> None:
        if self._ready:
            return
        notes = await self.repository.init()
        theme = await self.theme.load()
        self._ready = True
        logger.info(
            "Notes state initialised",
            extra={"event": "state.init", "details": f"notes={len(notes)} | theme={theme}"},
        )


def build_kv_store(backend: str = STORAGE_BACKEND) -> KeyValueStore:
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend != "sqlite":
        logger.warning("Unknown storage backend %r, using sqlite", backend)
    return SQLiteKeyValueStore(STORE_DB_PATH)


def build_state(backend: str = STORAGE_BACKEND) -> NotesAppState:
    return NotesAppState(build_kv_store(backend))
