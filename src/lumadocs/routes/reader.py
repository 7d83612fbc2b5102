"""Reader session endpoints: navigate to search results and inspect state."""
from fastapi import APIRouter, HTTPException, Path, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from lumadocs.content.schemas import ErrorResponse
from lumadocs.reader.navigator import DocumentLoadError, ResultNavigator
from lumadocs.reader.surface import ReaderSessions, ReaderState
from lumadocs.routes.deps import require_manifest

router = APIRouter(prefix="/reader", tags=["reader"])

SESSION_ID_PATTERN = r"^[A-Za-z0-9_-]{1,64}$"

_FAILURE_STATUS: dict[str, int] = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "fetch_failed": status.HTTP_502_BAD_GATEWAY,
    "invalid_id": status.HTTP_400_BAD_REQUEST,
}


class NavigateRequest(BaseModel):
    """Navigation target, usually taken from a search result.

    Attributes:
        document_id: Document to open.
        anchor_id: Anchor to land on; empty for the top of the document.
    """

    document_id: str = Field(min_length=1, max_length=500)
    anchor_id: str = Field(default="", max_length=200)


@router.post(
    "/{session_id}/navigate",
    response_model=ReaderState,
    responses={
        400: {"model": ReaderState},
        404: {"model": ReaderState},
        502: {"model": ReaderState},
        503: {"model": ErrorResponse},
    },
    summary="Open a document at an anchor",
)
async def navigate(
    request: Request,
    body: NavigateRequest,
    session_id: str = Path(pattern=SESSION_ID_PATTERN),
) -> JSONResponse:
    """Load a document on the session's surface and scroll to the anchor.

    A failed load leaves the surface showing an error panel; the response
    carries that state with a matching error status.

    Args:
        request: FastAPI request (provides access to app state).
        body: Navigation target.
        session_id: Reader session identifier.

    Returns:
        Reader state after navigation.
    """
    require_manifest(request)
    sessions: ReaderSessions = request.app.state.reader_sessions
    surface = sessions.get_or_create(session_id)

    navigator = ResultNavigator(
        request.app.state.loader,
        surface,
        settle_delay=request.app.state.settings.navigation_settle_ms / 1000,
    )

    try:
        await navigator.go_to(body.document_id, body.anchor_id)
    except DocumentLoadError as e:
        return JSONResponse(
            content=surface.state().model_dump(),
            status_code=_FAILURE_STATUS[e.reason],
        )

    return JSONResponse(content=surface.state().model_dump())


@router.get(
    "/{session_id}",
    response_model=ReaderState,
    responses={404: {"model": ErrorResponse}},
    summary="Current reader state",
)
async def get_reader_state(
    request: Request,
    session_id: str = Path(pattern=SESSION_ID_PATTERN),
) -> ReaderState:
    """Return what the session currently shows.

    Args:
        request: FastAPI request (provides access to app state).
        session_id: Reader session identifier.

    Returns:
        Reader state snapshot.

    Raises:
        HTTPException: 404 if the session has never navigated.
    """
    sessions: ReaderSessions = request.app.state.reader_sessions
    surface = sessions.get(session_id)
    if surface is None:
        raise HTTPException(status_code=404, detail="Reader session not found")
    return surface.state()
