from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence, Union

import psutil

from colored_logger import get_colored_logger
from .matcher import match_terms
from .models import Document, SearchResult
from .scorer import MAX_SCORE, SCORE_PER_MATCH, relevance_score
from .snippets import (
    DEFAULT_SNIPPET_LENGTH,
    MAX_SNIPPETS,
    SNIPPET_PADDING,
    extract_snippets,
)
from .tag_store import TagStore
from .tokenizer import distinct_terms, tokenize

logger = get_colored_logger(__name__)


def resolve_workers(workers: Union[int, str, None]) -> int:
    """
    Turn a configured worker count into a positive integer.

    0, None and "auto" mean one worker per physical core.
    """
    if workers in (None, 0, "auto"):
        return psutil.cpu_count(logical=False) or psutil.cpu_count() or 1
    return max(1, int(workers))


class SearchEngine:
    """
    Keyword search over an in-memory document collection.

    Features:
    - Case-insensitive substring matching of whitespace-separated terms
    - Bounded relevance score from matches per term
    - Snippet previews around the first matches
    - Tag filtering (any of the requested tag names)
    - Optional fan-out of per-document matching across threads
    """

    def __init__(
        self,
        tag_store: TagStore = None,
        snippet_length: int = DEFAULT_SNIPPET_LENGTH,
        max_snippets: int = MAX_SNIPPETS,
        snippet_padding: int = SNIPPET_PADDING,
        score_per_match: float = SCORE_PER_MATCH,
        max_score: float = MAX_SCORE,
        max_workers: int = 1,
    ):
        """
        Initialize the search engine.

        Args:
            tag_store: TagStore consulted for tag filters. If None, creates an
                in-memory instance.
            snippet_length: Width of each snippet window
            max_snippets: Match positions considered for snippets
            snippet_padding: Extra context on each side of a snippet window
            score_per_match: Score points per match per distinct term
            max_score: Relevance score ceiling
            max_workers: Threads used for per-document matching
        """
        self.tag_store = tag_store or TagStore()
        self.snippet_length = snippet_length
        self.max_snippets = max_snippets
        self.snippet_padding = snippet_padding
        self.score_per_match = score_per_match
        self.max_score = max_score
        self.max_workers = max_workers

    @classmethod
    def from_config(
        cls, config: Dict[str, Any], tag_store: TagStore = None
    ) -> "SearchEngine":
        search_config = config.get("search", {})
        return cls(
            tag_store=tag_store,
            snippet_length=search_config.get("snippet_length", DEFAULT_SNIPPET_LENGTH),
            max_snippets=search_config.get("max_snippets", MAX_SNIPPETS),
            snippet_padding=search_config.get("snippet_padding", SNIPPET_PADDING),
            score_per_match=search_config.get("score_per_match", SCORE_PER_MATCH),
            max_score=search_config.get("max_score", MAX_SCORE),
            max_workers=resolve_workers(search_config.get("workers", 1)),
        )

    def search(
        self,
        documents: Sequence[Document],
        query: str,
        tags: Optional[Sequence[str]] = None,
    ) -> List[SearchResult]:
        """
        Search documents for the query terms.

        Args:
            documents: Collection to search, in caller order
            query: Raw query text
            tags: Optional tag names; a document must carry at least one

        Returns:
            One SearchResult per matching document, highest score first.
            Documents with equal scores keep their input order.
        """
        terms = tokenize(query)
        if not terms:
            return []

        candidates = list(documents)
        if tags:
            candidates = [
                doc for doc in candidates if self.tag_store.has_any_tag(doc.id, tags)
            ]
            logger.debug(
                "Tag filter %s kept %d of %d documents",
                list(tags),
                len(candidates),
                len(documents),
            )

        term_count = len(distinct_terms(terms))

        if self.max_workers > 1 and len(candidates) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                scored = list(
                    executor.map(
                        lambda doc: self._search_document(doc, terms, term_count),
                        candidates,
                    )
                )
        else:
            scored = [
                self._search_document(doc, terms, term_count) for doc in candidates
            ]

        results = [result for result in scored if result is not None]
        # sorted() is stable, so ties keep document order
        results = sorted(results, key=lambda r: r.relevance_score, reverse=True)

        logger.debug("Search for %r returned %d results", query, len(results))
        return results

    def _search_document(
        self, doc: Document, terms: List[str], term_count: int
    ) -> Optional[SearchResult]:
        """Match, score and excerpt one document; None when nothing matched."""
        match_count, positions = match_terms(doc.content, terms)
        if match_count == 0:
            return None

        return SearchResult(
            doc_id=doc.id,
            doc_name=doc.name,
            match_count=match_count,
            snippets=tuple(
                extract_snippets(
                    doc.content,
                    positions,
                    snippet_length=self.snippet_length,
                    max_snippets=self.max_snippets,
                    padding=self.snippet_padding,
                )
            ),
            relevance_score=relevance_score(
                match_count,
                term_count,
                score_per_match=self.score_per_match,
                max_score=self.max_score,
            ),
        )
