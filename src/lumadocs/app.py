"""FastAPI application factory and lifespan management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
import structlog
from fastapi import FastAPI

from lumadocs import __version__
from lumadocs.config import Settings
from lumadocs.content import (
    DocumentFetcher,
    FileSystemFetcher,
    HttpFetcher,
    ManifestLoadError,
    MarkdownRenderer,
    load_manifest,
)
from lumadocs.middleware.cors import configure_cors
from lumadocs.middleware.logging import RequestLoggingMiddleware
from lumadocs.reader import DocumentLoader, ReaderSessions
from lumadocs.routes import content, health, reader, search
from lumadocs.search import SearchIndex

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle events.

    Sets up the document source and loads the manifest on startup. A
    manifest failure does not stop the server: dependent endpoints answer
    503 with the error so the reader sees an error panel. The search index
    is created empty and built on first search.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info("api_startup", host=settings.host, port=settings.port)

    client: httpx.AsyncClient | None = None
    fetcher: DocumentFetcher
    if settings.docs_base_url:
        client = httpx.AsyncClient(
            base_url=settings.docs_base_url.rstrip("/") + "/",
            timeout=settings.fetch_timeout,
            follow_redirects=True,
        )
        fetcher = HttpFetcher(client)
        logger.info("document_source_remote", base_url=settings.docs_base_url)
    else:
        fetcher = FileSystemFetcher(Path(settings.docs_root))
        logger.info("document_source_local", docs_root=settings.docs_root)

    manifest = None
    manifest_error: str | None = None
    try:
        manifest = await load_manifest(fetcher, settings.manifest_file)
    except ManifestLoadError as e:
        manifest_error = str(e)
        logger.error("manifest_load_failed", source=e.source, error=manifest_error)

    renderer = MarkdownRenderer()

    app.state.fetcher = fetcher
    app.state.renderer = renderer
    app.state.manifest = manifest
    app.state.manifest_error = manifest_error
    app.state.search_index = SearchIndex(fetch_concurrency=settings.index_fetch_concurrency)
    app.state.loader = DocumentLoader(fetcher, renderer, manifest)
    app.state.reader_sessions = ReaderSessions()

    try:
        yield
    finally:
        if client is not None:
            await client.aclose()
        logger.info("api_shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function to create configured FastAPI application.

    Args:
        settings: Configuration instance. Creates default if None.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Luma Docs API",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/v1/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/api/v1/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings

    configure_cors(app, settings.cors_origins)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(content.router, prefix="/api/v1")
    app.include_router(search.router, prefix="/api/v1")
    app.include_router(reader.router, prefix="/api/v1")

    return app
