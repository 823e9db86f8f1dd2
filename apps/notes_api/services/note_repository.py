"""Каноническая коллекция заметок и её синхронизация с key-value хранилищем.

Каждая мутация следует схеме «прочитать всю коллекцию → изменить → записать
всю коллекцию». In-memory кэш заменяется только после успешной записи, поэтому
кэш никогда не показывает заметку, которой нет в хранилище.

Версионирования коллекции нет: при нескольких писателях (несколько вкладок или
процессов над одним хранилищем) выигрывает последняя запись.
"""

# --- Imports ---
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from pydantic import ValidationError

from ..config import STORAGE_KEY
from ..schemas import Note, normalize_color, normalize_title, utc_now
from .errors import KeyValueStoreError, StorageReadError, StorageWriteError
from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)


# --- Основные блоки ---
class NoteRepository:
    """Owns the ordered note collection; the only writer of the notes key."""

    def __init__(
        self,
        kv_store: KeyValueStore,
        key: str = STORAGE_KEY,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._kv = kv_store
        self._key = key
        self._clock = clock
        self._notes: list[Note] = []
        self._initialized = False

    async def init(self) -> list[Note]:
        if not self._initialized:
            await self.load()
            self._initialized = True
        return self.list()

    # --- Storage I/O ---

    async def _read_notes(self) -> list[Note]:
        try:
            result = await self._kv.get([self._key])
        except KeyValueStoreError as exc:
            logger.error(
                "Failed to read notes",
                extra={"event": "notes.read.error", "details": str(exc)},
            )
            raise StorageReadError(self._key) from exc

        raw = result.get(self._key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.error(
                "Stored notes payload is not a list",
                extra={"event": "notes.read.error", "details": type(raw).__name__},
            )
            raise StorageReadError(self._key, "stored notes payload is not a list")
        try:
            return [Note.model_validate(record) for record in raw]
        except ValidationError as exc:
            logger.error(
                "Stored note record is malformed",
                extra={"event": "notes.read.error", "details": str(exc)},
            )
            raise StorageReadError(self._key, "stored note record is malformed") from exc

    async def _write_notes(self, notes: list[Note]) -> None:
        try:
            await self._kv.set({self._key: [note.to_record() for note in notes]})
        except KeyValueStoreError as exc:
            logger.error(
                "Failed to persist notes",
                extra={"event": "notes.write.error", "details": str(exc)},
            )
            raise StorageWriteError(self._key) from exc

    # --- Queries ---

    async def load(self) -> list[Note]:
        """Перечитывает коллекцию; при ошибке чтения остаётся последний кэш."""
        try:
            notes = await self._read_notes()
        except StorageReadError:
            logger.warning(
                "Keeping last known notes",
                extra={"event": "notes.load.fallback", "details": f"cached={len(self._notes)}"},
            )
            return self.list()
        self._notes = notes
        logger.info("Notes loaded", extra={"event": "notes.load", "details": f"count={len(notes)}"})
        return self.list()

    def list(self) -> list[Note]:
        return list(self._notes)

    def get(self, note_id: int) -> Note | None:
        return next((note for note in self._notes if note.id == note_id), None)

    def search(self, query: str) -> list[Note]:
        """Case-insensitive substring match on title or content, order kept."""
        needle = query.strip().lower()
        if not needle:
            return self.list()
        return [
            note
            for note in self._notes
            if needle in note.title.lower() or needle in note.content.lower()
        ]

    # --- Mutations ---

    def _next_id(self, notes: list[Note], now: datetime) -> int:
        candidate = int(now.timestamp() * 1000)
        taken = {note.id for note in notes}
        if candidate in taken:
            candidate = max(taken) + 1
        return candidate

    async def create(self, title: str, content: str, color: str | None = None) -> Note:
        color = normalize_color(color)
        notes = await self._read_notes()
        now = self._clock()
        stamp = now.isoformat()
        note = Note(
            id=self._next_id(notes, now),
            title=normalize_title(title),
            content=content,
            color=color,
            created_at=stamp,
            updated_at=stamp,
        )
        updated = [note, *notes]
        await self._write_notes(updated)
        self._notes = updated
        logger.info("Note created", extra={"event": "notes.create", "note_id": note.id})
        return note

    async def update(self, note_id: int, title: str, content: str, color: str | None = None) -> Note | None:
        """Returns the updated note, or ``None`` when ``note_id`` is unknown.

        The note's stored color is kept even when it is outside the palette.
        """
        notes = await self._read_notes()
        index = next((i for i, note in enumerate(notes) if note.id == note_id), None)
        if index is None:
            self._notes = notes
            logger.warning("Note to update not found", extra={"event": "notes.update.missing", "note_id": note_id})
            return None

        color = normalize_color(color, current=notes[index].color)
        note = notes[index].model_copy(
            update={
                "title": normalize_title(title),
                "content": content,
                "color": color,
                "updated_at": self._clock().isoformat(),
            }
        )
        updated = list(notes)
        updated[index] = note
        await self._write_notes(updated)
        self._notes = updated
        logger.info("Note updated", extra={"event": "notes.update", "note_id": note_id})
        return note

    async def delete(self, note_id: int) -> bool:
        """Удаляет заметку; ``False`` если такой нет (хранилище не трогаем)."""
        notes = await self._read_notes()
        remaining = [note for note in notes if note.id != note_id]
        if len(remaining) == len(notes):
            self._notes = notes
            logger.warning("Note to delete not found", extra={"event": "notes.delete.missing", "note_id": note_id})
            return False

        await self._write_notes(remaining)
        self._notes = remaining
        logger.info("Note deleted", extra={"event": "notes.delete", "note_id": note_id})
        return True
