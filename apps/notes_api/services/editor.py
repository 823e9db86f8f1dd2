"""Диспетчер действий редактора: сообщение → переход автомата → вызов репозитория."""

# --- Imports ---
from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable

from ..schemas import EditorAction, EditorOutcome, Note
from .editor_state import EditorState
from .errors import StorageReadError, StorageWriteError
from .note_repository import NoteRepository

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[int], bool | Awaitable[bool]]
Handler = Callable[[EditorAction, ConfirmCallback], Awaitable[EditorOutcome]]


# --- Functions ---
def decline_all(note_id: int) -> bool:
    """Default confirmation collaborator: nothing is deleted without a prompt."""
    return False


def _log_note_id(*candidates: int | None) -> int | str:
    return next((note_id for note_id in candidates if note_id is not None), "-")


# --- Основные блоки ---
class NoteEditor:
    """Processes one ``EditorAction`` at a time against a ``NoteRepository``.

    The caller is expected to serialize actions (one in flight at a time).
    Storage failures during save/delete leave the editor open with its draft,
    so the user can retry with the next action.
    """

    def __init__(self, repository: NoteRepository, confirm: ConfirmCallback = decline_all) -> None:
        self.repository = repository
        self.state = EditorState()
        self._confirm = confirm
        self._handlers: dict[str, Handler] = {
            "open_new": self._open_new,
            "open_note": self._open_note,
            "edit": self._edit,
            "save": self._save,
            "cancel": self._cancel,
            "delete": self._delete,
        }

    async def dispatch(self, action: EditorAction, confirm: ConfirmCallback | None = None) -> EditorOutcome:
        logger.info(
            "Editor action received",
            extra={"event": f"editor.{action.type}", "note_id": _log_note_id(action.note_id, self.state.note_id)},
        )
        handler = self._handlers[action.type]
        return await handler(action, confirm or self._confirm)

    def _outcome(self, status: str, note: Note | None = None, detail: str | None = None) -> EditorOutcome:
        return EditorOutcome(
            status=status,
            editor=self.state.snapshot(),
            note=note,
            notes=self.repository.list(),
            detail=detail,
        )

    async def _open_new(self, action: EditorAction, confirm: ConfirmCallback) -> EditorOutcome:
        self.state.open_new()
        return self._outcome("opened")

    async def _open_note(self, action: EditorAction, confirm: ConfirmCallback) -> EditorOutcome:
        if action.note_id is None:
            self.state.open_new()
        else:
            self.state.open_note(action.note_id, self.repository.list())
        return self._outcome("opened", note=self.repository.get(self.state.note_id) if self.state.note_id is not None else None)

    async def _edit(self, action: EditorAction, confirm: ConfirmCallback) -> EditorOutcome:
        self.state.edit(title=action.title, content=action.content, color=action.color)
        return self._outcome("edited")

    async def _cancel(self, action: EditorAction, confirm: ConfirmCallback) -> EditorOutcome:
        self.state.close()
        return self._outcome("cancelled")

    async def _save(self, action: EditorAction, confirm: ConfirmCallback) -> EditorOutcome:
        request = self.state.request_save()
        if request is None:
            return self._outcome("skipped", detail="title and content are empty")

        try:
            if request.note_id is None:
                note = await self.repository.create(request.title, request.content, request.color)
                status = "created"
            else:
                note = await self.repository.update(request.note_id, request.title, request.content, request.color)
                if note is None:
                    self.state.close()
                    return self._outcome("not_found", detail=f"note {request.note_id} no longer exists")
                status = "updated"
        except (StorageReadError, StorageWriteError) as exc:
            return self._outcome("storage_error", detail=str(exc))

        self.state.close()
        return self._outcome(status, note=note)

    async def _delete(self, action: EditorAction, confirm: ConfirmCallback) -> EditorOutcome:
        request = self.state.request_delete()
        approved = confirm(request.note_id)
        if inspect.isawaitable(approved):
            approved = await approved
        if not approved:
            return self._outcome("declined")

        try:
            deleted = await self.repository.delete(request.note_id)
        except (StorageReadError, StorageWriteError) as exc:
            return self._outcome("storage_error", detail=str(exc))

        self.state.close()
        if not deleted:
            return self._outcome("not_found", detail=f"note {request.note_id} no longer exists")
        return self._outcome("deleted")
