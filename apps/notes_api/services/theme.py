"""Настройка светлой/тёмной темы — отдельный ключ, независимый от заметок."""

# --- Imports ---
from __future__ import annotations

import logging

from ..config import DEFAULT_THEME, THEME_KEY, THEMES
from .errors import KeyValueStoreError, StorageWriteError
from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)


# --- Основные блоки ---
class ThemePreference:
    def __init__(self, kv_store: KeyValueStore, key: str = THEME_KEY) -> None:
        self._kv = kv_store
        self._key = key
        self._theme = DEFAULT_THEME

    @property
    def current(self) -> str:
        return self._theme

    async def load(self) -> str:
        try:
            result = await self._kv.get([self._key])
        except KeyValueStoreError as exc:
            logger.error("Failed to read theme", extra={"event": "theme.read.error", "details": str(exc)})
            return self._theme
        value = result.get(self._key)
        self._theme = value if value in THEMES else DEFAULT_THEME
        return self._theme

    async def set(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValueError(f"unknown theme {theme!r}")
        try:
            await self._kv.set({self._key: theme})
        except KeyValueStoreError as exc:
            logger.error("Failed to persist theme", extra={"event": "theme.write.error", "details": str(exc)})
            raise StorageWriteError(self._key) from exc
        self._theme = theme
        logger.info("Theme changed", extra={"event": "theme.set", "details": theme})
        return theme

    async def toggle(self) -> str:
        return await self.set("dark" if self._theme == "light" else "light")
