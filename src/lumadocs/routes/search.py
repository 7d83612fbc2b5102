"""Search API endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from fastapi import APIRouter, Query, Request

from lumadocs.content.schemas import ErrorResponse
from lumadocs.routes.deps import require_manifest
from lumadocs.search.highlight import highlight
from lumadocs.search.ranker import ScoredEntry, rank
from lumadocs.search.schemas import ContentKind, HeadingKind, SearchResponse, SearchResult

if TYPE_CHECKING:
    from lumadocs.search.index import SearchIndex

router = APIRouter(tags=["search"])


def _to_result(item: ScoredEntry, query: str) -> SearchResult:
    entry = item.entry
    match entry.kind:
        case HeadingKind(level=level):
            kind, heading_level = "heading", level
        case ContentKind():
            kind, heading_level = "content", None
        case _:
            assert_never(entry.kind)

    return SearchResult(
        title=entry.title,
        kind=kind,
        level=heading_level,
        snippet=highlight(entry.snippet, query),
        document_id=entry.document_id,
        anchor_id=entry.anchor_id,
        score=item.score,
    )


@router.get(
    "/search",
    response_model=SearchResponse,
    responses={503: {"model": ErrorResponse}},
    summary="Search the documentation",
    description="Ranks headings and paragraphs across all documents against a free-text query.",
)
async def search(
    request: Request,
    q: str = Query(default="", max_length=200, description="Search query string"),
) -> SearchResponse:
    """Search headings and paragraphs across every document.

    The index is built on the first search of the process and reused after.
    Queries shorter than two characters return no results.

    Args:
        request: FastAPI request (provides access to app state).
        q: Search query string.

    Returns:
        Up to ten ranked results with highlighted snippets.
    """
    manifest = require_manifest(request)
    search_index: SearchIndex = request.app.state.search_index

    if not search_index.is_built:
        await search_index.build(
            manifest.documents(),
            request.app.state.fetcher,
            request.app.state.renderer,
        )

    results = [_to_result(item, q) for item in rank(q, search_index)]
    return SearchResponse(query=q, results=results, total=len(results))
