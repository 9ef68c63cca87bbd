import json
import os
import tempfile
import threading
import unittest

from scrapbook.local import InMemoryNotesBackend, JsonFileNotesBackend
from scrapbook.store import NoteDraft, NotesStore


class JsonFileNotesBackendTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "notes.json")

    def tearDown(self):
        self.tmp.cleanup()

    def test_missing_file_reads_empty(self):
        self.assertEqual(JsonFileNotesBackend(self.path).list_notes(), [])

    def test_notes_survive_restart(self):
        store = NotesStore([JsonFileNotesBackend(self.path)])
        saved = store.save_note(NoteDraft(author="Sam", message="hi", visible_to_others=True))

        restarted = NotesStore([JsonFileNotesBackend(self.path)])
        self.assertEqual(restarted.get_notes(), [saved])

    def test_memory_does_not_survive_restart(self):
        NotesStore([InMemoryNotesBackend()]).save_note(NoteDraft(author="Sam", message="hi"))
        self.assertEqual(NotesStore([InMemoryNotesBackend()]).get_notes(), [])

    def test_file_holds_json_array_in_wire_format(self):
        store = NotesStore([JsonFileNotesBackend(self.path)])
        note = store.save_note(NoteDraft(author="Sam", message="hi", color="blue"))
        with open(self.path, encoding="utf-8") as f:
            payload = json.load(f)
        self.assertEqual(payload, [note.as_dict()])
        self.assertIn("visibleToOthers", payload[0])
        self.assertIn("createdAt", payload[0])
        self.assertEqual(os.listdir(self.tmp.name), ["notes.json"])

    def test_corrupt_file_raises(self):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write('{"not": "a list"}')
        with self.assertRaises(ValueError):
            JsonFileNotesBackend(self.path).list_notes()

    def test_concurrent_writers_lose_nothing(self):
        store = NotesStore([JsonFileNotesBackend(self.path)])

        def submit(index):
            store.save_note(NoteDraft(author=f"author-{index}", message="hi"))

        threads = [threading.Thread(target=submit, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(len(store.get_notes()), 20)

    def test_is_writable_creates_directory(self):
        data_dir = os.path.join(self.tmp.name, "nested", "data")
        self.assertTrue(JsonFileNotesBackend.is_writable(data_dir))
        self.assertTrue(os.path.isdir(data_dir))


class InMemoryNotesBackendTests(unittest.TestCase):
    def test_public_listing_filters(self):
        backend = InMemoryNotesBackend()
        store = NotesStore([backend])
        store.save_note(NoteDraft(author="A", message="x", visible_to_others=True))
        store.save_note(NoteDraft(author="B", message="y"))
        self.assertEqual(len(backend.list_notes()), 2)
        self.assertEqual([n.author for n in backend.list_public_notes()], ["A"])

    def test_reset(self):
        backend = InMemoryNotesBackend()
        NotesStore([backend]).save_note(NoteDraft(author="A", message="x"))
        backend.reset()
        self.assertEqual(backend.list_notes(), [])


if __name__ == "__main__":
    unittest.main()
