import unittest

from scrapbook.db import SqlNotesBackend
from scrapbook.store import Note, NoteDraft, NotesStore


class SqlNotesBackendTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the SQL backend.
    """

    def setUp(self):
        self.db = SqlNotesBackend("sqlite+pysqlite:///:memory:")

    def test_insert_and_list(self):
        note = Note(
            id="n1",
            author="Sam",
            message="Great teammate!",
            visible_to_others=True,
            created_at="2024-05-01T10:00:00.000Z",
            color="#fff",
        )
        self.db.insert_note(note)
        self.assertEqual(self.db.list_notes(), [note])

    def test_ordered_newest_first(self):
        for note_id, created_at in (
            ("a", "2024-01-01T00:00:00.000Z"),
            ("c", "2024-03-01T00:00:00.000Z"),
            ("b", "2024-02-01T00:00:00.000Z"),
        ):
            self.db.insert_note(
                Note(
                    id=note_id,
                    author="x",
                    message="y",
                    visible_to_others=False,
                    created_at=created_at,
                )
            )
        self.assertEqual([n.id for n in self.db.list_notes()], ["c", "b", "a"])

    def test_public_filter_runs_in_query(self):
        store = NotesStore([self.db])
        shared = store.save_note(NoteDraft(author="A", message="x", visible_to_others=True))
        store.save_note(NoteDraft(author="B", message="y"))
        self.assertEqual(self.db.list_public_notes(), [shared])
        self.assertEqual(len(store.get_notes()), 2)

    def test_duplicate_id_rejected(self):
        note = Note(
            id="dup",
            author="a",
            message="b",
            visible_to_others=False,
            created_at="2024-01-01T00:00:00.000Z",
        )
        self.db.insert_note(note)
        with self.assertRaises(Exception):
            self.db.insert_note(note)

    def test_empty_url_rejected(self):
        with self.assertRaises(ValueError):
            SqlNotesBackend("")


if __name__ == "__main__":
    unittest.main()
