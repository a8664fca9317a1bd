import unittest

from docsearch.highlighter import (
    DEFAULT_HIGHLIGHT_STYLE,
    highlight_keywords,
    highlight_spans,
)


class TestHighlightKeywords(unittest.TestCase):
    """Test cases for <mark> highlighting."""

    def test_empty_query_returns_text_unchanged(self):
        """An empty or blank query should leave the text untouched."""
        text = "  Some <b>text</b> with\ttabs  "
        self.assertIs(highlight_keywords(text, ""), text)
        self.assertEqual(highlight_keywords(text, "   "), text)

    def test_matches_are_wrapped_preserving_case(self):
        """Each occurrence should be wrapped with its original casing."""
        result = highlight_keywords("An Apple a day, apple pie", "apple", style="s")

        self.assertEqual(
            result,
            'An <mark style="s">Apple</mark> a day, <mark style="s">apple</mark> pie',
        )

    def test_default_style_is_applied(self):
        """The default inline style should be used when none is given."""
        result = highlight_keywords("apple", "APPLE")
        self.assertEqual(
            result, f'<mark style="{DEFAULT_HIGHLIGHT_STYLE}">apple</mark>'
        )

    def test_terms_match_literally(self):
        """Regex metacharacters in a term should not act as patterns."""
        result = highlight_keywords("a+b and aab", "a+b", style="s")
        self.assertEqual(result, '<mark style="s">a+b</mark> and aab')

    def test_terms_are_applied_sequentially(self):
        """Each term runs over the output of the previous one."""
        result = highlight_keywords("apple", "app apple", style="s")
        self.assertEqual(result, '<mark style="s">app</mark>le')

    def test_later_term_can_match_inside_markup(self):
        """A later term matching the markup itself produces nested tags."""
        result = highlight_keywords("x", "x mark", style="s")
        self.assertEqual(
            result,
            '<<mark style="s">mark</mark> style="s">x</<mark style="s">mark</mark>>',
        )

    def test_no_match_returns_text_unchanged(self):
        """Text without any term should come back as-is."""
        self.assertEqual(highlight_keywords("banana", "apple"), "banana")

    def test_dotted_capital_i_is_highlighted(self):
        """A word should always highlight against its own spelling."""
        result = highlight_keywords("İstanbul", "İstanbul", style="s")
        self.assertEqual(result, '<mark style="s">İstanbul</mark>')

    def test_highlights_only_what_the_matcher_counts(self):
        """Long s (U+017F) is not an "s", so nothing is marked."""
        self.assertEqual(highlight_keywords("ſun", "s", style="s"), "ſun")


class TestHighlightSpans(unittest.TestCase):
    """Test cases for structured highlight spans."""

    def test_spans_cover_each_occurrence(self):
        """Every occurrence should be reported as a (start, end) span."""
        self.assertEqual(highlight_spans("Cat category", "cat"), [(0, 3), (4, 7)])

    def test_overlapping_spans_are_merged(self):
        """Overlapping or touching spans should merge into one."""
        self.assertEqual(highlight_spans("apple pie", "app apple"), [(0, 5)])
        self.assertEqual(highlight_spans("abcd", "ab cd"), [(0, 4)])

    def test_empty_query_has_no_spans(self):
        """An empty query should produce no spans."""
        self.assertEqual(highlight_spans("anything", ""), [])

    def test_dotted_capital_i_span(self):
        """Spans should be found for text containing U+0130."""
        self.assertEqual(highlight_spans("İstanbul", "İstanbul"), [(0, 8)])


if __name__ == "__main__":
    unittest.main()
