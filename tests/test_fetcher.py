"""Document fetcher tests."""

import asyncio
from pathlib import Path

import httpx
import pytest

from lumadocs.content.fetcher import (
    DocumentFetchError,
    DocumentNotFoundError,
    FileSystemFetcher,
    HttpFetcher,
)
from lumadocs.content.paths import SecurityError, resolve_document_path


def test_filesystem_fetch_reads_markdown(docs_root: Path) -> None:
    """Documents resolve to <id>.md under the root."""
    text = asyncio.run(FileSystemFetcher(docs_root).fetch("guides/memory"))
    assert text.startswith("# Memory")


def test_filesystem_fetch_missing_document(docs_root: Path) -> None:
    """Missing files raise DocumentNotFoundError."""
    with pytest.raises(DocumentNotFoundError) as exc_info:
        asyncio.run(FileSystemFetcher(docs_root).fetch("nope"))
    assert exc_info.value.code == "ENOENT"
    assert exc_info.value.document_id == "nope"


@pytest.mark.parametrize("document_id", ["../etc/passwd", "/etc/passwd", "a/../../b", "bad\0id"])
def test_filesystem_fetch_rejects_traversal(docs_root: Path, document_id: str) -> None:
    """Ids that could escape the root are refused."""
    with pytest.raises(SecurityError):
        asyncio.run(FileSystemFetcher(docs_root).fetch(document_id))


def test_resolve_document_path_appends_suffix(docs_root: Path) -> None:
    """The .md suffix is added only when missing."""
    assert resolve_document_path(docs_root, "introduction").name == "introduction.md"
    assert resolve_document_path(docs_root, "introduction.md").name == "introduction.md"


def _http_fetcher(handler) -> tuple[HttpFetcher, httpx.AsyncClient]:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url="https://docs.example/luma/",
    )
    return HttpFetcher(client), client


def test_http_fetch_returns_body() -> None:
    """Successful responses return the markdown text."""
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(200, text="# Remote\n")

    async def run() -> str:
        fetcher, client = _http_fetcher(handler)
        async with client:
            return await fetcher.fetch("language/functions")

    assert asyncio.run(run()) == "# Remote\n"
    assert seen == ["/luma/language/functions.md"]


@pytest.mark.parametrize(
    ("status", "error"),
    [(404, DocumentNotFoundError), (500, DocumentFetchError)],
)
def test_http_fetch_error_status(status: int, error: type[Exception]) -> None:
    """HTTP errors map to fetch errors, 404 to not-found."""

    async def run() -> str:
        fetcher, client = _http_fetcher(lambda request: httpx.Response(status))
        async with client:
            return await fetcher.fetch("missing")

    with pytest.raises(error) as exc_info:
        asyncio.run(run())
    assert exc_info.value.code == str(status)


def test_http_fetch_transport_error() -> None:
    """Connection failures surface as DocumentFetchError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async def run() -> str:
        fetcher, client = _http_fetcher(handler)
        async with client:
            return await fetcher.fetch("introduction")

    with pytest.raises(DocumentFetchError) as exc_info:
        asyncio.run(run())
    assert not isinstance(exc_info.value, DocumentNotFoundError)
