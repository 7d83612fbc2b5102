"""Document sources: local documentation root or a remote base URL."""
import asyncio
from pathlib import Path
from typing import Protocol

import httpx
import structlog

from lumadocs.content.paths import (
    DOCUMENT_SUFFIX,
    resolve_document_path,
    validate_document_id,
)

logger = structlog.get_logger()


class ContentError(Exception):
    """Base class for failures reading documentation content."""

    def __init__(self, message: str, document_id: str, code: str | None = None) -> None:
        """Initialize content error.

        Args:
            message: Error description.
            document_id: Document or file that failed.
            code: Optional error code (e.g. ENOENT, HTTP status).
        """
        super().__init__(message)
        self.document_id = document_id
        self.code = code


class DocumentFetchError(ContentError):
    """Raised when a document cannot be retrieved (I/O or network failure)."""


class DocumentNotFoundError(DocumentFetchError):
    """Raised when a document does not exist at its source."""


class DocumentFetcher(Protocol):
    """Retrieves raw markdown for documents and auxiliary files."""

    async def fetch(self, document_id: str) -> str:
        """Return the raw markdown of a document."""
        ...

    async def read_file(self, name: str) -> str:
        """Return the text of a file relative to the documentation root."""
        ...


class FileSystemFetcher:
    """Reads documents from a local documentation root.

    Attributes:
        root: Directory holding ``<document_id>.md`` files.
    """

    def __init__(self, root: Path) -> None:
        """Initialize fetcher.

        Args:
            root: Documentation root directory.
        """
        self.root = root

    async def fetch(self, document_id: str) -> str:
        """Read a document's markdown.

        Args:
            document_id: Identifier relative to root, without extension.

        Returns:
            Raw markdown text.

        Raises:
            SecurityError: If the identifier escapes the root.
            DocumentNotFoundError: If the file does not exist.
            DocumentFetchError: If the file cannot be read.
        """
        path = resolve_document_path(self.root, document_id)
        return await asyncio.to_thread(self._read, path, document_id)

    async def read_file(self, name: str) -> str:
        """Read an auxiliary file such as the manifest.

        Args:
            name: Filename relative to root.

        Returns:
            File text.
        """
        clean = validate_document_id(name)
        return await asyncio.to_thread(self._read, self.root / clean, name)

    @staticmethod
    def _read(path: Path, document_id: str) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise DocumentNotFoundError(
                f"Document not found: {path}",
                document_id,
                "ENOENT",
            ) from e
        except PermissionError as e:
            raise DocumentFetchError(
                f"Permission denied: {path}",
                document_id,
                "EACCES",
            ) from e
        except OSError as e:
            raise DocumentFetchError(
                f"Failed to read document: {e}",
                document_id,
                str(e.errno) if e.errno else None,
            ) from e
        except UnicodeDecodeError as e:
            raise DocumentFetchError(
                f"Document is not valid UTF-8: {path}",
                document_id,
                "EILSEQ",
            ) from e


class HttpFetcher:
    """Fetches documents over HTTP relative to a base URL.

    The client is owned by the caller, which is responsible for closing it.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize fetcher.

        Args:
            client: Client configured with the documentation base URL.
        """
        self._client = client

    async def fetch(self, document_id: str) -> str:
        """Download a document's markdown.

        Args:
            document_id: Identifier relative to the base URL, without extension.

        Returns:
            Raw markdown text.

        Raises:
            SecurityError: If the identifier is not a safe relative path.
            DocumentNotFoundError: On HTTP 404.
            DocumentFetchError: On any other HTTP or transport failure.
        """
        clean = validate_document_id(document_id)
        if not clean.endswith(DOCUMENT_SUFFIX):
            clean = f"{clean}{DOCUMENT_SUFFIX}"
        return await self._get(clean, document_id)

    async def read_file(self, name: str) -> str:
        """Download an auxiliary file such as the manifest."""
        return await self._get(validate_document_id(name), name)

    async def _get(self, path: str, document_id: str) -> str:
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as e:
            logger.warning("document_fetch_transport_error", document_id=document_id, error=str(e))
            raise DocumentFetchError(
                f"Network error fetching {path}: {e}",
                document_id,
            ) from e

        if response.status_code == 404:
            raise DocumentNotFoundError(
                f"Document not found: {response.url}",
                document_id,
                "404",
            )
        if response.is_error:
            raise DocumentFetchError(
                f"HTTP error {response.status_code} fetching {response.url}",
                document_id,
                str(response.status_code),
            )
        return response.text
