"""Health check endpoints for liveness and readiness probes."""
from pathlib import Path
from typing import Literal

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

router = APIRouter(prefix="/health", tags=["health"])


class LivenessResponse(BaseModel):
    """Response model for liveness probe."""

    status: Literal["alive"]


class ReadinessCheck(BaseModel):
    """Individual dependency check result.

    Attributes:
        name: Identifier for the dependency being checked.
        status: Result of the check ('ok' or 'failed').
        message: Error details when status is 'failed'.
    """

    name: str
    status: Literal["ok", "failed"]
    message: str | None = None


class ReadinessResponse(BaseModel):
    """Response model for readiness probe.

    Attributes:
        status: Overall readiness ('ready' or 'not_ready').
        search_index_built: Whether the search index has been built yet.
        checks: List of individual dependency check results.
    """

    status: Literal["ready", "not_ready"]
    search_index_built: bool
    checks: list[ReadinessCheck]


def _check_docs_root(path: str) -> ReadinessCheck:
    """Verify the documentation root exists and is listable."""
    name = f"dir:{path}"
    try:
        p = Path(path)
        if p.is_dir():
            next(p.iterdir(), None)
            return ReadinessCheck(name=name, status="ok")
        return ReadinessCheck(name=name, status="failed", message="Directory not found")
    except OSError as e:
        return ReadinessCheck(name=name, status="failed", message=str(e))


def _check_manifest(request: Request) -> ReadinessCheck:
    if request.app.state.manifest is not None:
        return ReadinessCheck(name="manifest", status="ok")
    return ReadinessCheck(
        name="manifest",
        status="failed",
        message=request.app.state.manifest_error,
    )


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Liveness probe endpoint.

    Returns:
        Liveness status response.
    """
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(request: Request) -> JSONResponse:
    """Readiness probe endpoint.

    Ready once the manifest has loaded and, for local corpora, the
    documentation root is accessible. The search index is built lazily and
    does not gate readiness.

    Returns:
        Readiness status with individual check results; 503 if any fail.
    """
    settings = request.app.state.settings
    checks = [_check_manifest(request)]
    if not settings.docs_base_url:
        checks.append(_check_docs_root(settings.docs_root))

    all_ok = all(c.status == "ok" for c in checks)
    response = ReadinessResponse(
        status="ready" if all_ok else "not_ready",
        search_index_built=request.app.state.search_index.is_built,
        checks=checks,
    )
    code = status.HTTP_200_OK if all_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=response.model_dump(), status_code=code)
