"""Pydantic-схемы заметок: модель хранения, запросы и карточки списка."""
# --- Imports ---
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import COLOR_PALETTE, DEFAULT_COLOR, UNTITLED


# --- Functions ---
def normalize_color(color: str | None, current: str | None = None) -> str:
    """Пустой цвет заменяется дефолтным; цвет вне палитры отклоняется.

    ``current`` is the color already stored on the note: it is accepted as-is
    even when it is not in the palette.
    """
    if not color:
        return DEFAULT_COLOR
    if color not in COLOR_PALETTE and color != current:
        raise ValueError(f"color {color!r} is not in the palette")
    return color


def normalize_title(title: str) -> str:
    return title if title.strip() else UNTITLED


# --- Models / Classes ---
class Note(BaseModel):
    """A persisted note. Wire/storage names are camelCase (``createdAt``)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    title: str = UNTITLED
    content: str = ""
    color: str = DEFAULT_COLOR
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")

    def to_record(self) -> dict[str, str | int]:
        return self.model_dump(by_alias=True)


class CreateNoteRequest(BaseModel):
    title: str = ""
    content: str = ""
    color: str = DEFAULT_COLOR

    @field_validator("color")
    @classmethod
    def check_color(cls, value: str) -> str:
        return normalize_color(value)


class UpdateNoteRequest(BaseModel):
    """Palette check happens in the repository, against the stored note color."""

    title: str
    content: str
    color: str


class NoteCard(BaseModel):
    id: int
    title: str
    preview: str
    color: str


class NoteListView(BaseModel):
    cards: list[NoteCard] = Field(default_factory=list)
    empty_message: str | None = None
