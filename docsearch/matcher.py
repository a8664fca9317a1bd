from typing import List, Sequence, Tuple

from colored_logger import get_colored_logger

logger = get_colored_logger(__name__)


def fold_case(text: str) -> str:
    """
    Lower-case text without changing its length.

    A character whose lower-case form is several code points (U+0130 becomes
    "i" plus a combining dot) folds to the first of them, so offsets into the
    folded string are valid offsets into the original.
    """
    lowered = text.lower()
    if len(lowered) == len(text):
        return lowered

    return "".join(char.lower()[0] for char in text)


def match_all(content: str, term: str) -> List[int]:
    """
    Find every case-insensitive occurrence of term in content.

    Matching is plain substring search. After each hit the scan resumes at
    the end of that hit, so "a" occurs twice in "aa" and "aa" once in "aaa".

    Args:
        content: Text to scan
        term: Search term

    Returns:
        Character offsets of each occurrence, left to right
    """
    if not term:
        return []

    haystack = fold_case(content)
    needle = fold_case(term)

    positions = []
    start = 0
    while True:
        index = haystack.find(needle, start)
        if index == -1:
            break
        positions.append(index)
        start = index + len(needle)

    return positions


def match_terms(content: str, terms: Sequence[str]) -> Tuple[int, List[int]]:
    """
    Run match_all for each term in order and combine the results.

    Args:
        content: Document text
        terms: Tokenized query terms (repeats included)

    Returns:
        Tuple of (total match count, offsets grouped by term in query order)
    """
    positions: List[int] = []
    for term in terms:
        term_positions = match_all(content, term)
        logger.trace("Term %r matched %d time(s)", term, len(term_positions))
        positions.extend(term_positions)

    return len(positions), positions
