SCORE_PER_MATCH = 25
MAX_SCORE = 100


def relevance_score(
    match_count: int,
    term_count: int,
    score_per_match: float = SCORE_PER_MATCH,
    max_score: float = MAX_SCORE,
) -> float:
    """
    Convert a document's match count into a bounded relevance score.

    The score grows linearly with matches per query term and saturates at
    max_score: with the defaults, four matches for every term scores 100.

    Args:
        match_count: Total matches across all terms (>= 0)
        term_count: Number of distinct query terms (>= 1)
        score_per_match: Points per match per term
        max_score: Ceiling for the score

    Returns:
        Score in [0, max_score]
    """
    if term_count < 1:
        raise ValueError("term_count must be at least 1")

    return float(min(max_score, (match_count / term_count) * score_per_match))
