"""Loading documents onto a reader surface and landing on search results."""

import asyncio
from typing import Literal

import structlog

from lumadocs.content.fetcher import DocumentFetcher, DocumentFetchError, DocumentNotFoundError
from lumadocs.content.manifest import display_name
from lumadocs.content.paths import SecurityError
from lumadocs.content.renderer import MarkdownRenderer
from lumadocs.content.schemas import BlockTree, Manifest
from lumadocs.reader.surface import ReaderSurface

logger = structlog.get_logger()

HEADER_OFFSET = 100
HIGHLIGHT_DURATION = 1.5
FALLBACK_SCROLL_TOP = 0
SETTLE_DELAY = 0.1

LoadFailure = Literal["not_found", "fetch_failed", "invalid_id"]


class DocumentLoadError(Exception):
    """Raised when a document cannot be fetched and mounted."""

    def __init__(self, message: str, document_id: str, reason: LoadFailure) -> None:
        """Initialize load error.

        Args:
            message: Error description shown on the surface.
            document_id: Document that failed to load.
            reason: Failure category.
        """
        super().__init__(message)
        self.document_id = document_id
        self.reason = reason


class DocumentLoader:
    """Fetches, renders and mounts documents on a surface."""

    def __init__(
        self,
        fetcher: DocumentFetcher,
        renderer: MarkdownRenderer,
        manifest: Manifest | None = None,
    ) -> None:
        """Initialize loader.

        Args:
            fetcher: Source of raw markdown.
            renderer: Markdown renderer.
            manifest: Manifest used to look up display names.
        """
        self._fetcher = fetcher
        self._renderer = renderer
        self._manifest = manifest

    def title_for(self, document_id: str) -> str:
        """Display name for a document."""
        ref = self._manifest.find(document_id) if self._manifest else None
        return ref.title if ref else display_name(document_id)

    async def load(self, surface: ReaderSurface, document_id: str) -> BlockTree:
        """Load a document and mount it.

        On failure the surface shows an error panel. No retry is attempted.

        Args:
            surface: Surface to mount on.
            document_id: Document to show.

        Returns:
            The mounted block tree.

        Raises:
            DocumentLoadError: If the document cannot be fetched.
        """
        reason: LoadFailure
        try:
            raw = await self._fetcher.fetch(document_id)
        except DocumentNotFoundError as e:
            message, reason, error = f"Document not found: {document_id}", "not_found", e
        except DocumentFetchError as e:
            message, reason, error = f"Failed to load {document_id}", "fetch_failed", e
        except SecurityError as e:
            message, reason, error = f"Invalid document id: {document_id}", "invalid_id", e
        else:
            tree = self._renderer.render(raw)
            surface.mount(document_id, self.title_for(document_id), tree)
            return tree

        logger.warning(
            "document_load_failed",
            session_id=surface.session_id,
            document_id=document_id,
            reason=reason,
            error=str(error),
        )
        surface.show_error(message)
        raise DocumentLoadError(message, document_id, reason) from error


class ResultNavigator:
    """Takes a reader to a search result.

    The surface gives no "mounted" acknowledgment to wait on, so the
    navigator waits a fixed settle delay before locating the anchor.
    """

    def __init__(
        self,
        loader: DocumentLoader,
        surface: ReaderSurface,
        settle_delay: float = SETTLE_DELAY,
        header_offset: float = HEADER_OFFSET,
        highlight_duration: float = HIGHLIGHT_DURATION,
        fallback_top: float = FALLBACK_SCROLL_TOP,
    ) -> None:
        """Initialize navigator.

        Args:
            loader: Loads documents onto the surface.
            surface: Reader surface to drive.
            settle_delay: Seconds to wait after mounting before locating.
            header_offset: Space kept above the anchor when scrolling to it.
            highlight_duration: Seconds an anchor stays highlighted.
            fallback_top: Scroll position used when there is no anchor to land on.
        """
        self._loader = loader
        self._surface = surface
        self._settle_delay = settle_delay
        self._header_offset = header_offset
        self._highlight_duration = highlight_duration
        self._fallback_top = fallback_top

    async def go_to(self, document_id: str, anchor_id: str = "") -> None:
        """Load a document and land on an anchor within it.

        Args:
            document_id: Document to show.
            anchor_id: Anchor to scroll to; empty lands near the top.

        Raises:
            DocumentLoadError: If the document cannot be loaded.
        """
        await self._loader.load(self._surface, document_id)

        if not anchor_id:
            self._surface.scroll_to(self._fallback_top)
            return

        await asyncio.sleep(self._settle_delay)

        if self._surface.document_id != document_id:
            logger.info(
                "navigation_superseded",
                document_id=document_id,
                current_document_id=self._surface.document_id,
            )
            return

        element = self._surface.locate(anchor_id)
        if element is None:
            logger.info("anchor_not_found", document_id=document_id, anchor_id=anchor_id)
            self._surface.scroll_to(self._fallback_top)
            return

        self._surface.scroll_to(element.top - self._header_offset, behavior="smooth")
        token = self._surface.add_highlight(anchor_id)
        asyncio.get_running_loop().call_later(
            self._highlight_duration, self._surface.remove_highlight, token
        )
        logger.debug("navigated", document_id=document_id, anchor_id=anchor_id, top=element.top)
