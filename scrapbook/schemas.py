"""
Pydantic schemas for the notes API.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from scrapbook.store import Note


class CreateNoteRequest(BaseModel):
    # Presence is checked by the store so blank and missing values get the same 400.
    author: Optional[str] = None
    message: Optional[str] = None
    visibleToOthers: bool = False
    color: Optional[str] = None


class NoteResponse(BaseModel):
    id: str
    author: str
    message: str
    visibleToOthers: bool
    createdAt: str
    color: Optional[str] = None

    @classmethod
    def from_note(cls, note: Note) -> "NoteResponse":
        return cls(**note.as_dict())


class HealthResponse(BaseModel):
    status: str
    backends: list[str]
