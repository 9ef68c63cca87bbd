"""
Copy notes from a local JSON notes file into the configured primary backend.

Useful when moving a scrapbook that was collected on a development host into
the hosted table, the SQL database or Redis. Notes keep their id and createdAt;
ids already present in the target are skipped.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scrapbook.config import get_settings
from scrapbook.dependencies import resolve_backends
from scrapbook.local import InMemoryNotesBackend, JsonFileNotesBackend
from scrapbook.store import NotesBackend

logger = logging.getLogger(__name__)


def pick_target(backends: list[NotesBackend], source_path: str) -> NotesBackend | None:
    source = os.path.abspath(source_path)
    for backend in backends:
        if isinstance(backend, InMemoryNotesBackend):
            continue
        if isinstance(backend, JsonFileNotesBackend) and os.path.abspath(backend.path) == source:
            continue
        return backend
    return None


def migrate(source: JsonFileNotesBackend, target: NotesBackend, *, dry_run: bool = False) -> int:
    existing_ids = {note.id for note in target.list_notes()}
    copied = 0
    for note in source.list_notes():
        if note.id in existing_ids:
            continue
        if not dry_run:
            target.insert_note(note)
        existing_ids.add(note.id)
        copied += 1
        logger.info("Copied note %s by %s", note.id, note.author)
    return copied


def main() -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Migrate scrapbook notes from a JSON file")
    parser.add_argument(
        "--source",
        type=str,
        default=os.path.join(settings.data_dir, settings.notes_filename),
        help="Path to the JSON notes file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be copied without writing",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    if not os.path.exists(args.source):
        logger.error("Source file %s does not exist", args.source)
        return 1

    target = pick_target(resolve_backends(settings), args.source)
    if target is None:
        logger.error("No persistent target backend configured")
        return 1

    copied = migrate(JsonFileNotesBackend(args.source), target, dry_run=args.dry_run)
    logger.info(
        "%s %d notes into the %s backend",
        "Would copy" if args.dry_run else "Copied",
        copied,
        target.name,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
