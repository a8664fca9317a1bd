"""
docsearch - keyword search and tagging for small document collections

Finds, ranks and previews matches across plain-text documents held in
memory, with user-defined tags to narrow a search.

Key Components:
- tokenize: Splits a raw query into lower-case terms
- match_all / match_terms: Case-insensitive substring scanning
- relevance_score: Bounded 0-100 ranking from matches per term
- extract_snippets: Deduplicated preview excerpts around matches
- highlight_keywords / highlight_spans: Markup or spans for query terms
- TagStore: Per-document tags over a pluggable key-value storage
- SearchEngine: Filters, matches, scores and ranks documents
- DocumentLoader: Reads plain-text files into Documents
"""

from .models import Document, Tag, SearchResult
from .tokenizer import tokenize
from .matcher import match_all, match_terms
from .scorer import relevance_score
from .snippets import extract_snippets
from .highlighter import highlight_keywords, highlight_spans
from .storage import KeyValueStorage, MemoryStorage, SqliteStorage
from .tag_store import TagStore
from .search_engine import SearchEngine
from .loader import DocumentLoader, format_file_size
from .config import load_config

__all__ = [
    "Document",
    "Tag",
    "SearchResult",
    "tokenize",
    "match_all",
    "match_terms",
    "relevance_score",
    "extract_snippets",
    "highlight_keywords",
    "highlight_spans",
    "KeyValueStorage",
    "MemoryStorage",
    "SqliteStorage",
    "TagStore",
    "SearchEngine",
    "DocumentLoader",
    "format_file_size",
    "load_config",
]
