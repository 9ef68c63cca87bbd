"""
Notes store facade and the record types it hands out.

The store owns an ordered chain of backends. Reads go to the first backend
that answers, writes land in the first backend that accepts them; a failing
backend is logged and skipped.
"""

from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol, Sequence

from scrapbook.errors import InvalidNoteError, StorageUnavailableError

logger = logging.getLogger(__name__)


_FRACTION = re.compile(r"\.(\d+)")


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def utc_timestamp(now: datetime | None = None) -> str:
    """Format the current time, rounded up so it never precedes `now`."""
    now = now or datetime.now(timezone.utc)
    remainder = now.microsecond % 1000
    if remainder:
        now += timedelta(microseconds=1000 - remainder)
    return format_timestamp(now)


def parse_timestamp(value: str) -> datetime:
    """Parse a stored createdAt value; unparseable values sort oldest."""
    try:
        # fromisoformat on 3.10 only takes 3 or 6 fractional digits.
        text = _FRACTION.sub(
            lambda m: "." + m.group(1)[:6].ljust(6, "0"),
            value.replace("Z", "+00:00"),
            count=1,
        )
        parsed = datetime.fromisoformat(text)
    except (AttributeError, ValueError):
        return datetime.min.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalize_timestamp(value: str) -> str:
    """Rewrite a parseable timestamp in the Z-suffixed millisecond form."""
    parsed = parse_timestamp(value)
    if parsed == datetime.min.replace(tzinfo=timezone.utc):
        return value
    return format_timestamp(parsed)


@dataclass(frozen=True)
class Note:
    id: str
    author: str
    message: str
    visible_to_others: bool
    created_at: str
    color: Optional[str] = None

    def as_dict(self) -> dict:
        """Wire format shared by the API and the JSON-based backends."""
        data = {
            "id": self.id,
            "author": self.author,
            "message": self.message,
            "visibleToOthers": self.visible_to_others,
            "createdAt": self.created_at,
        }
        if self.color is not None:
            data["color"] = self.color
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Note":
        return cls(
            id=str(data["id"]),
            author=data["author"],
            message=data["message"],
            visible_to_others=bool(data.get("visibleToOthers", False)),
            created_at=data["createdAt"],
            color=data.get("color"),
        )


@dataclass(frozen=True)
class NoteDraft:
    author: str
    message: str
    visible_to_others: bool = False
    color: Optional[str] = None


class NotesBackend(Protocol):
    """Operations the store needs from a persistence backend."""

    name: str

    def list_notes(self) -> list[Note]:
        ...

    def list_public_notes(self) -> list[Note]:
        ...

    def insert_note(self, note: Note) -> None:
        ...


def newest_first(notes: Sequence[Note]) -> list[Note]:
    # sorted() is stable, so equal timestamps keep backend order.
    return sorted(notes, key=lambda note: parse_timestamp(note.created_at), reverse=True)


class NotesStore:
    """Storage-agnostic facade over an ordered list of backends."""

    def __init__(self, backends: Sequence[NotesBackend]):
        self.backends: tuple[NotesBackend, ...] = tuple(backends)

    @property
    def backend_names(self) -> list[str]:
        return [backend.name for backend in self.backends]

    def get_notes(self) -> list[Note]:
        for backend in self.backends:
            try:
                notes = backend.list_notes()
            except Exception:
                logger.exception("Error reading notes from %s backend", backend.name)
                continue
            return newest_first(notes)
        logger.warning("No notes backend answered; returning an empty list")
        return []

    def get_public_notes(self) -> list[Note]:
        for backend in self.backends:
            try:
                notes = backend.list_public_notes()
            except Exception:
                logger.exception(
                    "Error reading public notes from %s backend", backend.name
                )
                continue
            return newest_first([note for note in notes if note.visible_to_others])
        logger.warning("No notes backend answered; returning an empty list")
        return []

    def save_note(self, draft: NoteDraft) -> Note:
        author = (draft.author or "").strip()
        message = (draft.message or "").strip()
        if not author or not message:
            raise InvalidNoteError("Author and message are required")

        note = Note(
            id=str(uuid.uuid4()),
            author=author,
            message=message,
            visible_to_others=bool(draft.visible_to_others),
            created_at=utc_timestamp(),
            color=draft.color,
        )

        last_error: Exception | None = None
        for backend in self.backends:
            try:
                backend.insert_note(note)
            except Exception as exc:
                logger.exception("Error saving note to %s backend", backend.name)
                last_error = exc
                continue
            logger.info("Saved note %s to %s backend", note.id, backend.name)
            return note

        raise StorageUnavailableError() from last_error
