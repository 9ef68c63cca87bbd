"""
Backend resolution and dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging
import os

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError

from scrapbook.config import Settings
from scrapbook.db import SqlNotesBackend
from scrapbook.hosted import HostedNotesBackend, create_hosted_client
from scrapbook.kv import RedisNotesBackend
from scrapbook.local import InMemoryNotesBackend, JsonFileNotesBackend
from scrapbook.store import NotesBackend, NotesStore

logger = logging.getLogger(__name__)


def resolve_backends(settings: Settings) -> list[NotesBackend]:
    """
    Build the ordered backend chain from configuration.

    Priority: hosted table, SQL database, Redis, JSON file, process memory.
    """
    if settings.use_in_memory_backends:
        logger.info("In-memory notes backend forced by configuration")
        return [InMemoryNotesBackend()]

    backends: list[NotesBackend] = []

    client = create_hosted_client(
        settings.supabase_url,
        settings.supabase_anon_key,
        timeout=settings.hosted_timeout_seconds,
    )
    if client is not None:
        backends.append(HostedNotesBackend(client=client, table=settings.supabase_table))

    database_url = (settings.database_url or "").strip()
    if database_url:
        try:
            backends.append(SqlNotesBackend(database_url))
        except (SQLAlchemyError, ImportError):
            logger.exception("SQL notes backend unavailable, skipping it")

    redis_url = (settings.redis_url or "").strip()
    if redis_url:
        try:
            backends.append(
                RedisNotesBackend(url=redis_url, key=settings.redis_notes_key)
            )
        except ValueError:
            logger.exception("Redis notes backend unavailable, skipping it")

    if JsonFileNotesBackend.is_writable(settings.data_dir):
        backends.append(
            JsonFileNotesBackend(os.path.join(settings.data_dir, settings.notes_filename))
        )
    else:
        logger.warning("Data directory %s is not writable", settings.data_dir)

    if settings.memory_fallback:
        backends.append(InMemoryNotesBackend())

    return backends


def build_notes_store(settings: Settings) -> NotesStore:
    store = NotesStore(resolve_backends(settings))
    if store.backends:
        logger.info("Notes backends resolved: %s", ", ".join(store.backend_names))
    else:
        logger.warning("No notes backend configured; writes will fail")
    return store


def get_notes_store(request: Request) -> NotesStore:
    """Return the store built for this application at startup."""
    return request.app.state.notes_store
