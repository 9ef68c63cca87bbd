"""
Hosted notes backend: a Supabase (PostgREST) table reached over HTTPS.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import requests

from scrapbook.store import Note, normalize_timestamp

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10  # seconds


@dataclass
class HostedClient:
    """Thin PostgREST client authenticated with a project API key."""

    url: str
    key: str
    timeout: float = REQUEST_TIMEOUT
    session: requests.Session = field(default_factory=requests.Session)

    def __post_init__(self):
        self.url = self.url.rstrip("/")
        self.session.headers.update(
            {
                "apikey": self.key,
                "Authorization": f"Bearer {self.key}",
                "Content-Type": "application/json",
            }
        )

    def _table_url(self, table: str) -> str:
        return f"{self.url}/rest/v1/{table}"

    def select(
        self,
        table: str,
        *,
        filters: Optional[dict] = None,
        order: Optional[str] = None,
    ) -> list[dict]:
        """
        Fetches rows from a table.

        Args:
            table (str): The table name.
            filters (dict): PostgREST filters, e.g. {"visible_to_others": "eq.true"}.
            order (str): PostgREST ordering, e.g. "created_at.desc".

        Returns:
            list[dict]: The rows, raises requests.HTTPError otherwise.
        """
        params = {"select": "*"}
        if filters:
            params.update(filters)
        if order:
            params["order"] = order
        response = self.session.get(
            self._table_url(table), params=params, timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()

    def insert(self, table: str, row: dict) -> dict:
        """Inserts one row and returns it as stored."""
        response = self.session.post(
            self._table_url(table),
            json=row,
            headers={"Prefer": "return=representation"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        rows = response.json()
        return rows[0] if rows else row


def create_hosted_client(
    url: Optional[str], key: Optional[str], *, timeout: float = REQUEST_TIMEOUT
) -> Optional[HostedClient]:
    """Return a client only when both the URL and the key are non-empty."""
    url = (url or "").strip()
    key = (key or "").strip()
    if not url or not key:
        return None
    return HostedClient(url=url, key=key, timeout=timeout)


@dataclass
class HostedNotesBackend:
    client: HostedClient
    table: str = "notes"
    name: str = "hosted"

    def _to_note(self, row: dict) -> Note:
        return Note(
            id=str(row["id"]),
            author=row["author"],
            message=row["message"],
            visible_to_others=bool(row.get("visible_to_others", False)),
            created_at=normalize_timestamp(row["created_at"]),
            color=row.get("color"),
        )

    def list_notes(self) -> list[Note]:
        rows = self.client.select(self.table, order="created_at.desc")
        return [self._to_note(row) for row in rows]

    def list_public_notes(self) -> list[Note]:
        rows = self.client.select(
            self.table,
            filters={"visible_to_others": "eq.true"},
            order="created_at.desc",
        )
        return [self._to_note(row) for row in rows]

    def insert_note(self, note: Note) -> None:
        row = {
            "id": note.id,
            "author": note.author,
            "message": note.message,
            "visible_to_others": note.visible_to_others,
            "created_at": note.created_at,
        }
        if note.color is not None:
            row["color"] = note.color
        stored = self.client.insert(self.table, row)
        logger.debug("Hosted backend stored note %s", stored.get("id", note.id))
