import os
import shutil
import sqlite3
import tempfile
import unittest

from docsearch.storage import MemoryStorage, SqliteStorage


class TestMemoryStorage(unittest.TestCase):
    """Test cases for MemoryStorage class."""

    def setUp(self):
        self.storage = MemoryStorage()

    def test_get_missing_key_returns_none(self):
        """Reading an unknown key should return None."""
        self.assertIsNone(self.storage.get("missing"))

    def test_set_then_get_returns_value(self):
        """A stored value should be readable back."""
        self.storage.set("doc_tags_1", "[]")
        self.assertEqual(self.storage.get("doc_tags_1"), "[]")

    def test_keys_filters_by_prefix_in_insertion_order(self):
        """keys() should honour the prefix and insertion order."""
        self.storage.set("doc_tags_b", "1")
        self.storage.set("other", "2")
        self.storage.set("doc_tags_a", "3")

        self.assertEqual(self.storage.keys("doc_tags_"), ["doc_tags_b", "doc_tags_a"])
        self.assertEqual(len(self.storage.keys()), 3)


class TestSqliteStorage(unittest.TestCase):
    """Test cases for SqliteStorage class."""

    def setUp(self):
        """Set up storage with temporary database."""
        self.temp_db = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
        self.temp_db.close()
        self.storage = SqliteStorage(self.temp_db.name)

    def tearDown(self):
        """Clean up temporary database file."""
        self.storage.close()
        if os.path.exists(self.temp_db.name):
            os.unlink(self.temp_db.name)

    def test_get_missing_key_returns_none(self):
        """Reading an unknown key should return None."""
        self.assertIsNone(self.storage.get("missing"))

    def test_set_overwrites_value(self):
        """Setting an existing key should replace its value."""
        self.storage.set("k", "one")
        self.storage.set("k", "two")
        self.assertEqual(self.storage.get("k"), "two")

    def test_overwrite_keeps_key_order(self):
        """Overwriting a key should not move it to the end."""
        self.storage.set("doc_tags_1", "a")
        self.storage.set("doc_tags_2", "b")
        self.storage.set("doc_tags_1", "c")

        self.assertEqual(self.storage.keys("doc_tags_"), ["doc_tags_1", "doc_tags_2"])

    def test_keys_prefix_is_literal(self):
        """Underscores in the prefix should not act as wildcards."""
        self.storage.set("doc_tags_1", "a")
        self.storage.set("docXtagsY2", "b")

        self.assertEqual(self.storage.keys("doc_tags_"), ["doc_tags_1"])

    def test_values_persist_across_instances(self):
        """A new instance on the same file should see earlier writes."""
        self.storage.set("doc_tags_1", '[{"id": "x"}]')

        reopened = SqliteStorage(self.temp_db.name)
        self.assertEqual(reopened.get("doc_tags_1"), '[{"id": "x"}]')

    def test_unopenable_path_raises(self):
        """A path that cannot be opened as a database should raise."""
        temp_dir = tempfile.mkdtemp()
        try:
            with self.assertRaises(sqlite3.Error):
                SqliteStorage(temp_dir)
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)


if __name__ == "__main__":
    unittest.main()
