"""
Redis-backed notes backend.

Notes are kept in a single Redis list, one JSON document per element, so an
insert is a plain RPUSH.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

import redis
from redis import exceptions as redis_exceptions

from scrapbook.store import Note


@dataclass
class RedisNotesBackend:
    url: str
    key: str = "scrapbook:notes"
    name: str = "redis"

    def __post_init__(self):
        self.client = redis.Redis.from_url(self.url)

    def _reconnect(self) -> None:
        # Managed Redis resets idle connections; start fresh next call.
        self.client = redis.Redis.from_url(self.url)

    def list_notes(self) -> list[Note]:
        try:
            raw_items = self.client.lrange(self.key, 0, -1)
        except redis_exceptions.ConnectionError:
            self._reconnect()
            raise
        return [Note.from_dict(json.loads(item)) for item in raw_items]

    def list_public_notes(self) -> list[Note]:
        return [note for note in self.list_notes() if note.visible_to_others]

    def insert_note(self, note: Note) -> None:
        try:
            self.client.rpush(self.key, json.dumps(note.as_dict()))
        except redis_exceptions.ConnectionError:
            self._reconnect()
            raise
