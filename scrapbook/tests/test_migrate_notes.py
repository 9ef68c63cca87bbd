import importlib.util
import os
import tempfile
import unittest
from pathlib import Path

from scrapbook.db import SqlNotesBackend
from scrapbook.local import InMemoryNotesBackend, JsonFileNotesBackend
from scrapbook.store import NoteDraft, NotesStore

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "migrate_notes.py"
_spec = importlib.util.spec_from_file_location("migrate_notes", SCRIPT_PATH)
migrate_notes = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(migrate_notes)


class MigrateNotesTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "notes.json")
        self.source = JsonFileNotesBackend(self.path)
        store = NotesStore([self.source])
        self.first = store.save_note(NoteDraft(author="A", message="x", visible_to_others=True))
        self.second = store.save_note(NoteDraft(author="B", message="y"))
        self.target = SqlNotesBackend("sqlite+pysqlite:///:memory:")

    def tearDown(self):
        self.tmp.cleanup()

    def test_copies_notes_verbatim_and_skips_existing(self):
        self.target.insert_note(self.first)
        copied = migrate_notes.migrate(self.source, self.target)
        self.assertEqual(copied, 1)
        self.assertEqual(
            sorted(self.target.list_notes(), key=lambda n: n.id),
            sorted([self.first, self.second], key=lambda n: n.id),
        )

    def test_dry_run_writes_nothing(self):
        copied = migrate_notes.migrate(self.source, self.target, dry_run=True)
        self.assertEqual(copied, 2)
        self.assertEqual(self.target.list_notes(), [])

    def test_pick_target_skips_source_file_and_memory(self):
        backends = [JsonFileNotesBackend(self.path), InMemoryNotesBackend()]
        self.assertIsNone(migrate_notes.pick_target(backends, self.path))
        backends.insert(0, self.target)
        self.assertIs(migrate_notes.pick_target(backends, self.path), self.target)


if __name__ == "__main__":
    unittest.main()
