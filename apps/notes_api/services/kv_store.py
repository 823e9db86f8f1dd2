"""Асинхронные key-value хранилища: in-memory и SQLite.

Контракт соответствует ``chrome.storage.local``: ``get`` принимает список
ключей и возвращает только существующие, ``set`` записывает пачку значений.
Значения — JSON-совместимые структуры.
"""

# --- Imports ---
from __future__ import annotations

import asyncio
import copy
import json
import logging
import sqlite3
import threading
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol

from ..config import STORE_DB_PATH
from .errors import KeyValueStoreError

logger = logging.getLogger(__name__)


# --- Основные блоки ---
class KeyValueStore(Protocol):
    async def get(self, keys: Sequence[str]) -> dict[str, Any]: ...

    async def set(self, entries: Mapping[str, Any]) -> None: ...


class InMemoryKeyValueStore:
    """Process-local store; values are copied on the way in and out."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = {}
        if initial:
            self._data.update(copy.deepcopy(dict(initial)))

    async def get(self, keys: Sequence[str]) -> dict[str, Any]:
        return {key: copy.deepcopy(self._data[key]) for key in keys if key in self._data}

    async def set(self, entries: Mapping[str, Any]) -> None:
        try:
            encoded = {key: json.loads(json.dumps(value)) for key, value in entries.items()}
        except (TypeError, ValueError) as exc:
            raise KeyValueStoreError(f"value is not JSON-serializable: {exc}") from exc
        self._data.update(encoded)


class SQLiteKeyValueStore:
    """Thread-safe SQLite persistence for JSON values keyed by string.

    Соединение открывается лениво при первом обращении; вызовы выполняются
    в пуле потоков через ``asyncio.to_thread``.
    """

    def __init__(self, db_path: Path = STORE_DB_PATH) -> None:
        self.db_path = db_path
        self._lock = threading.Lock()
        self._conn: sqlite3.Connection | None = None

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA synchronous=NORMAL")
            conn.execute(
                "CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )
            conn.commit()
            self._conn = conn
            logger.info("Key-value store opened", extra={"event": "storage.open", "details": str(self.db_path)})
        return self._conn

    def _get_sync(self, keys: Sequence[str]) -> dict[str, Any]:
        if not keys:
            return {}
        placeholders = ", ".join("?" for _ in keys)
        with self._lock:
            conn = self._connection()
            rows = conn.execute(
                f"SELECT key, value FROM kv WHERE key IN ({placeholders})", tuple(keys)
            ).fetchall()
        return {key: json.loads(value) for key, value in rows}

    def _set_sync(self, entries: Mapping[str, Any]) -> None:
        payload = [(key, json.dumps(value, ensure_ascii=False)) for key, value in entries.items()]
        with self._lock:
            conn = self._connection()
            with conn:
                conn.executemany(
                    "INSERT INTO kv (key, value) VALUES (?, ?)"
                    " ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                    payload,
                )

    async def get(self, keys: Sequence[str]) -> dict[str, Any]:
        try:
            return await asyncio.to_thread(self._get_sync, list(keys))
        except (sqlite3.Error, ValueError) as exc:
            raise KeyValueStoreError(f"get failed: {exc}") from exc

    async def set(self, entries: Mapping[str, Any]) -> None:
        try:
            await asyncio.to_thread(self._set_sync, dict(entries))
        except (sqlite3.Error, TypeError, ValueError) as exc:
            raise KeyValueStoreError(f"set failed: {exc}") from exc

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
