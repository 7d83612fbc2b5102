"""In-memory search subsystem: index building, ranking and highlighting."""

from lumadocs.search.highlight import highlight
from lumadocs.search.index import DOMAIN_KEYWORDS, SearchIndex, extract_entries
from lumadocs.search.ranker import ScoredEntry, rank, search
from lumadocs.search.schemas import (
    ContentKind,
    HeadingKind,
    SearchEntry,
    SearchResponse,
    SearchResult,
)

__all__ = [
    "DOMAIN_KEYWORDS",
    "ContentKind",
    "HeadingKind",
    "ScoredEntry",
    "SearchEntry",
    "SearchIndex",
    "SearchResponse",
    "SearchResult",
    "extract_entries",
    "highlight",
    "rank",
    "search",
]
