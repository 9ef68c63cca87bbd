"""
HTTP routes for the notes API.
"""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query

from scrapbook.dependencies import get_notes_store
from scrapbook.schemas import CreateNoteRequest, HealthResponse, NoteResponse
from scrapbook.store import NoteDraft, NotesStore

router = APIRouter()


@router.get(
    "/notes", response_model=list[NoteResponse], response_model_exclude_none=True
)
def list_notes(
    view: Literal["all", "public"] = Query("all"),
    store: NotesStore = Depends(get_notes_store),
):
    """
    List notes newest first; view=public keeps only notes shared with others.
    """
    notes = store.get_public_notes() if view == "public" else store.get_notes()
    return [NoteResponse.from_note(note) for note in notes]


@router.post(
    "/notes",
    response_model=NoteResponse,
    response_model_exclude_none=True,
    status_code=201,
)
def create_note(
    payload: CreateNoteRequest,
    store: NotesStore = Depends(get_notes_store),
):
    note = store.save_note(
        NoteDraft(
            author=payload.author or "",
            message=payload.message or "",
            visible_to_others=payload.visibleToOthers,
            color=payload.color,
        )
    )
    return NoteResponse.from_note(note)


@router.get("/health", response_model=HealthResponse)
def health(store: NotesStore = Depends(get_notes_store)):
    return HealthResponse(status="ok", backends=store.backend_names)
