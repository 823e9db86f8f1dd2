"""Общие зависимости роутеров."""
# --- Imports ---
from __future__ import annotations

from fastapi import HTTPException, Request

from ..services.errors import NotesError
from ..services.state import NotesAppState


# --- Functions ---
async def get_state(request: Request) -> NotesAppState:
    state: NotesAppState = request.app.state.notes
    await state.init()
    return state


def storage_unavailable(exc: NotesError) -> HTTPException:
    return HTTPException(status_code=503, detail=f"Storage unavailable: {exc}")
