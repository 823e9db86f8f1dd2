"""Конечный автомат редактора заметки.

Состояния: ``CLOSED`` → ``CREATING`` | ``EDITING(note_id)`` → ``CLOSED``.
Автомат хранит только черновик и не обращается к репозиторию: сохранение и
удаление возвращаются вызывающему коду как запросы.
"""

# --- Imports ---
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..config import UNTITLED
from ..schemas import Draft, EditorMode, EditorSnapshot, Note, normalize_color
from .errors import EditorStateError

logger = logging.getLogger(__name__)


# --- Models / Classes ---
@dataclass(frozen=True)
class SaveRequest:
    note_id: int | None
    title: str
    content: str
    color: str


@dataclass(frozen=True)
class DeleteRequest:
    note_id: int


class EditorState:
    def __init__(self) -> None:
        self.mode = EditorMode.CLOSED
        self.note_id: int | None = None
        self.draft: Draft | None = None
        self._heading: str | None = None
        self._stored_color: str | None = None

    @property
    def is_open(self) -> bool:
        return self.mode is not EditorMode.CLOSED

    def open_new(self) -> None:
        self.mode = EditorMode.CREATING
        self.note_id = None
        self.draft = Draft()
        self._heading = "New Note"
        self._stored_color = None

    def open_note(self, note_id: int, notes: Sequence[Note]) -> None:
        note = next((item for item in notes if item.id == note_id), None)
        if note is None:
            logger.warning(
                "Note not found, opening a new draft instead",
                extra={"event": "editor.open.missing", "note_id": note_id},
            )
            self.open_new()
            return
        self.mode = EditorMode.EDITING
        self.note_id = note.id
        self.draft = Draft(title=note.title, content=note.content, color=note.color)
        self._heading = note.title or UNTITLED
        self._stored_color = note.color

    def edit(self, title: str | None = None, content: str | None = None, color: str | None = None) -> Draft:
        draft = self._require_draft()
        changes: dict[str, str] = {}
        if title is not None:
            changes["title"] = title
        if content is not None:
            changes["content"] = content
        if color is not None:
            changes["color"] = normalize_color(color, current=self._stored_color)
        self.draft = draft.model_copy(update=changes)
        return self.draft

    def request_save(self) -> SaveRequest | None:
        """``None`` означает пустой черновик: сохранять нечего, редактор остаётся открытым."""
        draft = self._require_draft()
        title = draft.title.strip()
        content = draft.content.strip()
        if not title and not content:
            logger.info(
                "Empty draft, save skipped",
                extra={"event": "editor.save.skip", "note_id": self.note_id if self.note_id is not None else "-"},
            )
            return None
        note_id = self.note_id if self.mode is EditorMode.EDITING else None
        return SaveRequest(note_id=note_id, title=title, content=content, color=draft.color)

    def request_delete(self) -> DeleteRequest:
        if self.mode is not EditorMode.EDITING or self.note_id is None:
            raise EditorStateError("only an existing note can be deleted")
        return DeleteRequest(note_id=self.note_id)

    def close(self) -> None:
        self.mode = EditorMode.CLOSED
        self.note_id = None
        self.draft = None
        self._heading = None
        self._stored_color = None

    def snapshot(self) -> EditorSnapshot:
        return EditorSnapshot(mode=self.mode, note_id=self.note_id, heading=self._heading, draft=self.draft)

    def _require_draft(self) -> Draft:
        if self.draft is None:
            raise EditorStateError("editor is closed")
        return self.draft
