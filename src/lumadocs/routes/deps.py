"""Shared accessors for application state used by route handlers."""

from fastapi import HTTPException, Request, status

from lumadocs.content.schemas import Manifest


def require_manifest(request: Request) -> Manifest:
    """Return the loaded manifest or fail with 503.

    A missing or malformed manifest is fatal for browsing and search, so
    every dependent endpoint reports it instead of serving partial data.

    Args:
        request: Current request (provides access to app state).

    Returns:
        The loaded manifest.

    Raises:
        HTTPException: 503 if the manifest failed to load at startup.
    """
    manifest: Manifest | None = request.app.state.manifest
    if manifest is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Documentation unavailable: {request.app.state.manifest_error}",
        )
    return manifest
