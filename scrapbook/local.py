"""
Process-local notes backends: a JSON file for development hosts and an
in-memory list as the last resort.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass, field

from scrapbook.store import Note

logger = logging.getLogger(__name__)


@dataclass
class InMemoryNotesBackend:
    """Notes held in process memory; gone after a restart."""

    name: str = "memory"
    notes: list[Note] = field(default_factory=list)

    def __post_init__(self):
        self._lock = threading.Lock()

    def list_notes(self) -> list[Note]:
        with self._lock:
            return list(self.notes)

    def list_public_notes(self) -> list[Note]:
        return [note for note in self.list_notes() if note.visible_to_others]

    def insert_note(self, note: Note) -> None:
        with self._lock:
            self.notes.append(note)

    def reset(self) -> None:
        """Clear all stored notes (useful in tests)."""
        with self._lock:
            self.notes.clear()


class JsonFileNotesBackend:
    """
    Notes kept as one JSON array on disk.

    The whole file is rewritten on every insert. Writers are serialized by a
    per-instance lock and the new content is swapped in with os.replace, so
    readers never see a partially written file.
    """

    name = "file"

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    @staticmethod
    def is_writable(data_dir: str) -> bool:
        try:
            os.makedirs(data_dir, exist_ok=True)
        except OSError:
            logger.warning("Cannot create notes data directory %s", data_dir)
            return False
        return os.access(data_dir, os.W_OK)

    def _read(self) -> list[Note]:
        if not os.path.exists(self.path):
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        if not isinstance(payload, list):
            raise ValueError(f"{self.path} does not contain a JSON array")
        return [Note.from_dict(item) for item in payload]

    def _write(self, notes: list[Note]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump([note.as_dict() for note in notes], f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def list_notes(self) -> list[Note]:
        with self._lock:
            return self._read()

    def list_public_notes(self) -> list[Note]:
        return [note for note in self.list_notes() if note.visible_to_others]

    def insert_note(self, note: Note) -> None:
        with self._lock:
            notes = self._read()
            notes.append(note)
            self._write(notes)
