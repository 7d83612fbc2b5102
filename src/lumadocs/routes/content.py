"""Content REST API endpoints: sidebar manifest and rendered documents."""
import structlog
from fastapi import APIRouter, HTTPException, Request

from lumadocs.content.fetcher import DocumentFetchError, DocumentNotFoundError
from lumadocs.content.paths import SecurityError
from lumadocs.content.schemas import (
    DocumentView,
    ErrorResponse,
    Manifest,
    ManifestFolder,
    ManifestNode,
    OutlineItem,
)
from lumadocs.routes.deps import require_manifest

logger = structlog.get_logger()

router = APIRouter(prefix="/content", tags=["content"])


def _manifest_tree(manifest: Manifest) -> list[ManifestNode]:
    nodes: list[ManifestNode] = []
    for entry in manifest.entries:
        if isinstance(entry, ManifestFolder):
            nodes.append(
                ManifestNode(
                    name=entry.name,
                    type="folder",
                    children=[
                        ManifestNode(name=doc.title, document_id=doc.id, type="document")
                        for doc in entry.documents
                    ],
                )
            )
        else:
            nodes.append(ManifestNode(name=entry.title, document_id=entry.id, type="document"))
    return nodes


@router.get(
    "/manifest",
    response_model=list[ManifestNode],
    responses={503: {"model": ErrorResponse}},
    summary="Documentation sidebar tree",
    description="Returns documents and folders in manifest order.",
)
async def get_manifest(request: Request) -> list[ManifestNode]:
    """List the documentation corpus for navigation.

    Returns:
        Top-level documents and folders.
    """
    return _manifest_tree(require_manifest(request))


@router.get(
    "/documents/{document_id:path}",
    response_model=DocumentView,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Get a rendered document",
    description="Returns the document rendered to HTML with anchored headings.",
)
async def get_document(request: Request, document_id: str) -> DocumentView:
    """Render a single document.

    Args:
        request: FastAPI request (provides access to app state).
        document_id: Document identifier, e.g. ``language/functions``.

    Returns:
        Rendered HTML plus the heading outline.

    Raises:
        HTTPException: 400 for unsafe ids, 404 if missing, 502 if unreadable.
    """
    require_manifest(request)

    try:
        raw = await request.app.state.fetcher.fetch(document_id)
    except SecurityError as e:
        logger.warning("document_security_error", document_id=document_id, error=str(e))
        raise HTTPException(status_code=400, detail="Invalid document id") from e
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail="Document not found") from e
    except DocumentFetchError as e:
        logger.error("document_fetch_failed", document_id=document_id, error=str(e))
        raise HTTPException(status_code=502, detail="Document could not be loaded") from e

    html, tree = request.app.state.renderer.render_html(raw)

    return DocumentView(
        id=document_id,
        title=request.app.state.loader.title_for(document_id),
        html=html,
        outline=[
            OutlineItem(text=block.text, level=block.level, anchor_id=block.anchor_id)
            for block in tree.headings()
            if block.anchor_id and block.level is not None
        ],
    )
