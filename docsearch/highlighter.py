from typing import List, Tuple

from .matcher import match_all
from .tokenizer import tokenize

DEFAULT_HIGHLIGHT_STYLE = (
    "background-color: #fbbf24; padding: 2px 4px; border-radius: 3px;"
)


def highlight_keywords(
    text: str, query: str, style: str = DEFAULT_HIGHLIGHT_STYLE
) -> str:
    """
    Wrap every case-insensitive occurrence of each query term in <mark> tags.

    Terms are applied one after another over the already-marked text, so
    overlapping terms (or a term that appears inside the markup itself) can
    produce nested tags. The original casing of the matched text is kept.

    Args:
        text: Text to highlight, usually a snippet
        query: Raw query string
        style: Inline CSS placed on each <mark> element

    Returns:
        Marked-up text, or text unchanged when the query has no terms
    """
    terms = tokenize(query)
    if not terms:
        return text

    opening = f'<mark style="{style}">'
    highlighted = text
    for term in terms:
        # Same occurrences the matcher counts, rewritten in one pass
        parts = []
        last = 0
        for pos in match_all(highlighted, term):
            end = pos + len(term)
            parts.append(highlighted[last:pos])
            parts.append(f"{opening}{highlighted[pos:end]}</mark>")
            last = end
        parts.append(highlighted[last:])
        highlighted = "".join(parts)

    return highlighted


def highlight_spans(text: str, query: str) -> List[Tuple[int, int]]:
    """
    Locate the character ranges a renderer should emphasise.

    Unlike highlight_keywords this returns structure instead of markup:
    sorted, non-overlapping (start, end) pairs covering every term occurrence,
    with touching or overlapping ranges merged.
    """
    spans = []
    for term in dict.fromkeys(tokenize(query)):
        spans.extend((pos, pos + len(term)) for pos in match_all(text, term))

    merged: List[Tuple[int, int]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))

    return merged
