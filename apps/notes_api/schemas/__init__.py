"""Реэкспорт всех Pydantic-схем API."""
# --- Imports ---
from __future__ import annotations

from .common import utc_now  # noqa: F401
from .editor import (  # noqa: F401
    Draft,
    EditorAction,
    EditorMode,
    EditorOutcome,
    EditorSnapshot,
)
from .notes import (  # noqa: F401
    CreateNoteRequest,
    Note,
    NoteCard,
    NoteListView,
    UpdateNoteRequest,
    normalize_color,
    normalize_title,
)
from .theme import Theme, ThemeState, UpdateThemeRequest  # noqa: F401
