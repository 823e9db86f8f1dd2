"""Роуты редактора: текущее состояние и приём действий пользователя."""

# --- Imports ---
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..schemas import EditorAction, EditorOutcome, EditorSnapshot
from ..services.errors import EditorStateError
from ..services.state import NotesAppState
from .deps import get_state

router = APIRouter(prefix="/api", tags=["editor"])


# --- Основные блоки ---
@router.get("/editor", response_model=EditorSnapshot)
async def get_editor(state: NotesAppState = Depends(get_state)) -> EditorSnapshot:
    return state.editor.state.snapshot()


@router.post("/editor/actions", response_model=EditorOutcome)
async def dispatch_action(action: EditorAction, state: NotesAppState = Depends(get_state)) -> EditorOutcome:
    try:
        return await state.editor.dispatch(action, confirm=lambda _note_id: action.confirmed)
    except EditorStateError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
