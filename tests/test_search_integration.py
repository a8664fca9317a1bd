import os
import shutil
import tempfile
import unittest
from pathlib import Path

from docsearch import (
    DocumentLoader,
    SearchEngine,
    SqliteStorage,
    TagStore,
    highlight_keywords,
)


class TestSearchIntegration(unittest.TestCase):
    """Integration tests for loading, tagging and searching together."""

    def setUp(self):
        """Set up a document directory and SQLite-backed tag store."""
        self.temp_dir = tempfile.mkdtemp()
        self.docs_dir = os.path.join(self.temp_dir, "docs")
        os.mkdir(self.docs_dir)
        self.db_path = os.path.join(self.temp_dir, "tags.db")

        self._create_documents()

        self.storage = SqliteStorage(self.db_path)
        self.tag_store = TagStore(self.storage)
        self.search_engine = SearchEngine(self.tag_store)
        self.loader = DocumentLoader(max_workers=1)
        self.documents = self.loader.load_directory(self.docs_dir)

    def tearDown(self):
        """Clean up temporary files and database."""
        self.storage.close()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _create_documents(self):
        """Write sample plain-text documents."""
        files = {
            "q1_invoice.txt": (
                "Invoice 1001. Payment due in 30 days. "
                "Late payment incurs a fee. Invoice total: $500."
            ),
            "q2_invoice.txt": "Invoice 1002 was paid in full.",
            "meeting.txt": "Agenda: discuss the budget and the payment schedule.",
            "recipe.md": "Mix flour and sugar. Bake for 20 minutes.",
        }
        for name, content in files.items():
            Path(self.docs_dir, name).write_text(content, encoding="utf-8")

    def test_search_ranks_loaded_documents(self):
        """Documents with more matches per term should rank first."""
        results = self.search_engine.search(self.documents, "invoice payment")

        self.assertEqual(
            [r.doc_id for r in results],
            ["q1_invoice.txt", "meeting.txt", "q2_invoice.txt"],
        )
        self.assertEqual(results[0].match_count, 4)
        self.assertEqual(results[0].relevance_score, 50)
        self.assertEqual(results[1].relevance_score, 12.5)
        self.assertEqual(results[2].relevance_score, 12.5)

    def test_tags_persist_and_filter_search(self):
        """Tags written through SQLite should filter a later search."""
        finance = self.tag_store.create_tag("finance")
        self.tag_store.tag("q2_invoice.txt", finance)
        self.tag_store.tag("meeting.txt", finance)

        reopened = TagStore(SqliteStorage(self.db_path))
        engine = SearchEngine(reopened)
        results = engine.search(self.documents, "invoice payment", ["finance"])

        self.assertEqual(
            [r.doc_id for r in results], ["meeting.txt", "q2_invoice.txt"]
        )
        self.assertEqual(reopened.all_tags(), [finance])

    def test_snippets_highlight_query_terms(self):
        """Snippets from a search can be highlighted with the same query."""
        results = self.search_engine.search(self.documents, "flour")
        snippet = results[0].snippets[0]

        highlighted = highlight_keywords(snippet, "flour", style="s")
        self.assertIn('<mark style="s">flour</mark>', highlighted)

    def test_whitespace_query_returns_nothing(self):
        """A blank query over a non-empty collection returns no results."""
        self.assertEqual(self.search_engine.search(self.documents, "   "), [])


if __name__ == "__main__":
    unittest.main()
