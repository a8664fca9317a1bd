from typing import List

from .matcher import fold_case


def tokenize(query: str) -> List[str]:
    """
    Split a raw query into lower-case search terms.

    Terms are separated by runs of whitespace; empty tokens are dropped and
    repeats are kept in query order. Punctuation is part of the term. Terms
    are folded the same way document content is, so a document always
    matches its own text.

    Args:
        query: Raw query text

    Returns:
        List of terms, empty for a blank or whitespace-only query
    """
    if not query:
        return []
    return fold_case(query).split()


def distinct_terms(terms: List[str]) -> List[str]:
    """Return terms with repeats removed, keeping first-seen order."""
    return list(dict.fromkeys(terms))
