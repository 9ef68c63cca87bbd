"""
Exceptions raised by the notes store.
"""

from __future__ import annotations


class NotesError(Exception):
    """Base class for notes store errors."""


class InvalidNoteError(NotesError):
    """A submitted note is missing its author or message."""


class StorageUnavailableError(NotesError):
    """No configured backend accepted a write."""

    def __init__(self, message: str = "no storage method available"):
        super().__init__(message)
