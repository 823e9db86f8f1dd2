"""Роуты CRUD и поиска заметок."""

# --- Imports ---
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import HTMLResponse

from ..schemas import CreateNoteRequest, Note, NoteListView, UpdateNoteRequest
from ..services.errors import StorageReadError, StorageWriteError
from ..services.presenter import render_cards, render_html
from ..services.state import NotesAppState
from .deps import get_state, storage_unavailable

router = APIRouter(prefix="/api", tags=["notes"])


# --- Основные блоки ---
@router.get("/notes", response_model=list[Note])
async def list_notes(q: str = "", state: NotesAppState = Depends(get_state)) -> list[Note]:
    return state.repository.search(q)


@router.get("/notes/cards", response_model=NoteListView)
async def list_note_cards(q: str = "", state: NotesAppState = Depends(get_state)) -> NoteListView:
    return render_cards(state.repository.search(q))


@router.get("/notes/render", response_class=HTMLResponse)
async def render_notes(q: str = "", state: NotesAppState = Depends(get_state)) -> HTMLResponse:
    return HTMLResponse(render_html(state.repository.search(q)))


@router.post("/notes/reload", response_model=list[Note])
async def reload_notes(state: NotesAppState = Depends(get_state)) -> list[Note]:
    return await state.repository.load()


@router.get("/notes/{note_id}", response_model=Note)
async def get_note(note_id: int, state: NotesAppState = Depends(get_state)) -> Note:
    note = state.repository.get(note_id)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


@router.post("/notes", response_model=Note)
async def create_note(payload: CreateNoteRequest, state: NotesAppState = Depends(get_state)) -> Note:
    try:
        return await state.repository.create(payload.title, payload.content, payload.color)
    except (StorageReadError, StorageWriteError) as exc:
        raise storage_unavailable(exc) from exc


@router.patch("/notes/{note_id}", response_model=Note)
async def update_note(note_id: int, payload: UpdateNoteRequest, state: NotesAppState = Depends(get_state)) -> Note:
    try:
        note = await state.repository.update(note_id, payload.title, payload.content, payload.color)
    except (StorageReadError, StorageWriteError) as exc:
        raise storage_unavailable(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


@router.delete("/notes/{note_id}", status_code=204, response_class=Response)
async def delete_note(
    note_id: int,
    confirm: bool = Query(False),
    state: NotesAppState = Depends(get_state),
) -> Response:
    if not confirm:
        raise HTTPException(status_code=428, detail="Deletion must be confirmed")
    try:
        deleted = await state.repository.delete(note_id)
    except (StorageReadError, StorageWriteError) as exc:
        raise storage_unavailable(exc) from exc
    if not deleted:
        raise HTTPException(status_code=404, detail="Note not found")
    return Response(status_code=204)
