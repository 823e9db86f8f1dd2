"""Pydantic-схемы сообщений редактора и результатов их обработки."""
# --- Imports ---
from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from ..config import DEFAULT_COLOR
from .notes import Note


# --- Models / Classes ---
class EditorMode(str, Enum):
    CLOSED = "closed"
    CREATING = "creating"
    EDITING = "editing"


class Draft(BaseModel):
    title: str = ""
    content: str = ""
    color: str = DEFAULT_COLOR


class EditorSnapshot(BaseModel):
    mode: EditorMode
    note_id: int | None = None
    heading: str | None = None
    draft: Draft | None = None


class EditorAction(BaseModel):
    """Одно действие пользователя, адресованное редактору."""

    type: Literal["open_new", "open_note", "edit", "save", "cancel", "delete"]
    note_id: int | None = None
    title: str | None = None
    content: str | None = None
    color: str | None = None
    # Подтверждение удаления от пользователя (для HTTP-клиента)
    confirmed: bool = False


OutcomeStatus = Literal[
    "opened",
    "edited",
    "created",
    "updated",
    "deleted",
    "cancelled",
    "skipped",
    "declined",
    "not_found",
    "storage_error",
]


class EditorOutcome(BaseModel):
    status: OutcomeStatus
    editor: EditorSnapshot
    note: Note | None = None
    notes: list[Note] = Field(default_factory=list)
    detail: str | None = None
