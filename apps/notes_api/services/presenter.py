"""Рендеринг списка заметок в карточки и HTML-фрагмент."""

# --- Imports ---
from __future__ import annotations

from collections.abc import Sequence
from html import escape

from ..config import EMPTY_STATE_MESSAGE, PREVIEW_LENGTH
from ..schemas import Note, NoteCard, NoteListView


# --- Functions ---
def preview(content: str, length: int = PREVIEW_LENGTH) -> str:
    if len(content) > length:
        return content[:length] + "..."
    return content


def render_cards(notes: Sequence[Note]) -> NoteListView:
    if not notes:
        return NoteListView(cards=[], empty_message=EMPTY_STATE_MESSAGE)
    return NoteListView(
        cards=[
            NoteCard(id=note.id, title=note.title, preview=preview(note.content), color=note.color)
            for note in notes
        ]
    )


def render_html(notes: Sequence[Note]) -> str:
    """Markup for the note list; user text is HTML-escaped."""
    view = render_cards(notes)
    if view.empty_message:
        return f'<p class="empty-state">{escape(view.empty_message)}</p>'
    parts = []
    for card in view.cards:
        parts.append(
            f'<div class="note-card" data-id="{card.id}">'
            f'<h3 class="note-title">{escape(card.title)}</h3>'
            f'<p class="note-preview">{escape(card.preview)}</p>'
            f'<div class="note-footer">'
            f'<span class="color-indicator" style="background: {escape(card.color)};"></span>'
            f"</div></div>"
        )
    return "\n".join(parts)
