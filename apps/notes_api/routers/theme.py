"""Роуты настройки темы."""

# --- Imports ---
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..schemas import ThemeState, UpdateThemeRequest
from ..services.errors import StorageWriteError
from ..services.state import NotesAppState
from .deps import get_state, storage_unavailable

router = APIRouter(prefix="/api", tags=["theme"])


# --- Основные блоки ---
@router.get("/theme", response_model=ThemeState)
async def get_theme(state: NotesAppState = Depends(get_state)) -> ThemeState:
    return ThemeState(theme=state.theme.current)


@router.put("/theme", response_model=ThemeState)
async def set_theme(payload: UpdateThemeRequest, state: NotesAppState = Depends(get_state)) -> ThemeState:
    try:
        return ThemeState(theme=await state.theme.set(payload.theme))
    except StorageWriteError as exc:
        raise storage_unavailable(exc) from exc


@router.post("/theme/toggle", response_model=ThemeState)
async def toggle_theme(state: NotesAppState = Depends(get_state)) -> ThemeState:
    try:
        return ThemeState(theme=await state.theme.toggle())
    except StorageWriteError as exc:
        raise storage_unavailable(exc) from exc
