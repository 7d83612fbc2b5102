"""Additive relevance scoring and top-K ranking over a built index."""

from typing import NamedTuple, assert_never

from lumadocs.search.index import SearchIndex
from lumadocs.search.schemas import ContentKind, HeadingKind, SearchEntry

MIN_QUERY_LENGTH = 2
RESULT_LIMIT = 10

TITLE_EXACT_POINTS = 100
TITLE_PREFIX_POINTS = 50
TITLE_CONTAINS_POINTS = 30
SNIPPET_CONTAINS_POINTS = 20
WORD_IN_TITLE_POINTS = 10
WORD_IN_SNIPPET_POINTS = 5
HEADING_POINTS = 10
HEADING_LEVEL_POINTS: dict[int, int] = {1: 5, 2: 3}


class ScoredEntry(NamedTuple):
    """An index entry paired with its score for one query."""

    entry: SearchEntry
    score: int


def query_words(query: str) -> list[str]:
    """Split a query into lowercase words longer than one character.

    Args:
        query: Raw query text.

    Returns:
        Words in query order, duplicates kept.
    """
    return [word for word in query.lower().split() if len(word) > 1]


def score_entry(entry: SearchEntry, phrase: str, words: list[str]) -> int:
    """Compute the additive relevance score of one entry.

    Headings always earn their kind and level bonus, so every h1-h4 entry
    scores above zero for any non-empty query.

    Args:
        entry: Entry to score.
        phrase: Lowercased, trimmed query.
        words: Output of query_words() for the same query.

    Returns:
        Score; zero means no match.
    """
    title = entry.title.lower()
    snippet = entry.snippet.lower()
    score = 0

    if title == phrase:
        score += TITLE_EXACT_POINTS
    if title.startswith(phrase):
        score += TITLE_PREFIX_POINTS
    if phrase in title:
        score += TITLE_CONTAINS_POINTS
    if phrase in snippet:
        score += SNIPPET_CONTAINS_POINTS

    for word in words:
        if word in title:
            score += WORD_IN_TITLE_POINTS
        if word in snippet:
            score += WORD_IN_SNIPPET_POINTS

    match entry.kind:
        case HeadingKind(level=level):
            score += HEADING_POINTS + HEADING_LEVEL_POINTS.get(level, 0)
        case ContentKind():
            pass
        case _:
            assert_never(entry.kind)

    return score


def rank(query: str, index: SearchIndex, limit: int = RESULT_LIMIT) -> list[ScoredEntry]:
    """Score every entry and return the best matches.

    Equal scores keep their index order (sorted() is stable).

    Args:
        query: Free-text query.
        index: Built search index.
        limit: Maximum number of results.

    Returns:
        Up to ``limit`` scored entries, best first. Empty for queries
        shorter than two characters after trimming.
    """
    phrase = query.strip().lower()
    if len(phrase) < MIN_QUERY_LENGTH:
        return []

    words = query_words(phrase)
    scored = [
        ScoredEntry(entry, score)
        for entry in index.entries
        if (score := score_entry(entry, phrase, words)) > 0
    ]
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored[:limit]


def search(query: str, index: SearchIndex) -> list[SearchEntry]:
    """Return the top entries for a query, best first.

    Args:
        query: Free-text query.
        index: Built search index.

    Returns:
        At most ten entries.
    """
    return [item.entry for item in rank(query, index)]
