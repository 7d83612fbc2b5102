"""Pytest configuration and fixtures."""

import sys
from collections.abc import Callable, Iterator
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from fastapi.testclient import TestClient

from lumadocs.app import create_app
from lumadocs.config import Settings
from lumadocs.content.fetcher import DocumentFetchError, DocumentNotFoundError
from lumadocs.content.paths import SecurityError

CORPUS: dict[str, str] = {
    "manifest.yaml": """\
documents:
  - id: introduction
    title: Introduction
  - folder: Guides
    documents:
      - guides/installation-guide
      - guides/memory
""",
    "introduction.md": """\
Welcome to the Luma reference. This page is a short overview.

# Overview

Luma is a small systems language.

## Hello World

Every program starts at main.
""",
    "guides/installation-guide.md": """\
# Installation Guide

Download the compiler archive and unpack it.

## Verifying the Install

Run the compiler with no arguments to print its version.
""",
    "guides/memory.md": """\
# Memory

Use alloc to request memory and free to release it.

## Deferred Cleanup

A defer statement runs when the enclosing scope exits, which keeps cleanup next to allocation.
""",
}


class MemoryFetcher:
    """In-memory document source that records fetches and can fail on demand."""

    def __init__(
        self,
        documents: dict[str, str],
        missing: set[str] | None = None,
        broken: set[str] | None = None,
    ) -> None:
        self.documents = documents
        self.missing = missing or set()
        self.broken = broken or set()
        self.fetched: list[str] = []

    async def fetch(self, document_id: str) -> str:
        self.fetched.append(document_id)
        if ".." in document_id:
            raise SecurityError("traversal", document_id)
        if document_id in self.broken:
            raise DocumentFetchError("connection reset", document_id)
        if document_id in self.missing or document_id not in self.documents:
            raise DocumentNotFoundError("not found", document_id, "404")
        return self.documents[document_id]

    async def read_file(self, name: str) -> str:
        if name not in self.documents:
            raise DocumentNotFoundError("not found", name, "404")
        return self.documents[name]


@pytest.fixture
def memory_fetcher() -> Callable[..., MemoryFetcher]:
    """Factory for in-memory fetchers."""
    return MemoryFetcher


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    """Write the sample corpus to a temporary documentation root."""
    root = tmp_path / "docs"
    for name, text in CORPUS.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def settings(docs_root: Path) -> Settings:
    """Create test settings pointing at the sample corpus."""
    return Settings(
        host="127.0.0.1",
        port=8000,
        debug=True,
        docs_root=str(docs_root),
        navigation_settle_ms=0,
    )


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """Create test client with the lifespan running."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
