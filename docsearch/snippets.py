from typing import List, Sequence

DEFAULT_SNIPPET_LENGTH = 150
MAX_SNIPPETS = 3
SNIPPET_PADDING = 20


def extract_snippets(
    text: str,
    positions: Sequence[int],
    snippet_length: int = DEFAULT_SNIPPET_LENGTH,
    max_snippets: int = MAX_SNIPPETS,
    padding: int = SNIPPET_PADDING,
) -> List[str]:
    """
    Build preview excerpts around match positions.

    Only the first max_snippets positions are considered, in the order given.
    Each excerpt is a window of snippet_length characters centred on the
    position, widened by padding on both sides and clamped to the text. The
    excerpt is stripped and wrapped in "...". Identical excerpts collapse into
    one, and an excerpt that strips to nothing is dropped without looking at
    later positions, so fewer than max_snippets may come back.

    Args:
        text: Original document content
        positions: Match offsets as reported by the matcher
        snippet_length: Width of the centred window
        max_snippets: How many positions to consider
        padding: Extra characters on each side of the window

    Returns:
        Unique snippets in first-seen order
    """
    snippets: List[str] = []
    text_length = len(text)
    half = snippet_length / 2

    for pos in list(positions)[:max_snippets]:
        start = max(0, pos - half)
        end = min(text_length, pos + half)
        excerpt = text[
            int(max(0, start - padding)) : int(min(text_length, end + padding))
        ].strip()

        if not excerpt:
            continue

        snippet = f"...{excerpt}..."
        if snippet not in snippets:
            snippets.append(snippet)

    return snippets
