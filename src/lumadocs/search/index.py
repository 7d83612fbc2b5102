"""In-memory search index built once per session from rendered documents."""

import asyncio
import time
from collections.abc import Iterable, Sequence
from typing import Protocol

import structlog

from lumadocs.content.fetcher import DocumentFetcher, DocumentFetchError
from lumadocs.content.paths import SecurityError
from lumadocs.content.schemas import Block, BlockKind, BlockTree, DocumentRef
from lumadocs.content.slug import MAX_ANCHORED_LEVEL, AnchorAllocator
from lumadocs.search.schemas import (
    SNIPPET_MAX_LENGTH,
    ContentKind,
    HeadingKind,
    SearchEntry,
)

logger = structlog.get_logger()

# Paragraphs longer than this are always indexed.
CONTENT_MIN_LENGTH = 100

# Luma keywords and builtins; a paragraph mentioning one is indexed regardless of length.
DOMAIN_KEYWORDS: frozenset[str] = frozenset({
    "const", "let", "fn", "struct", "enum", "loop", "if", "return",
    "alloc", "free", "defer", "cast", "sizeof", "pub", "priv",
})


class BlockRenderer(Protocol):
    """Anything that turns raw markdown into a block tree."""

    def render(self, raw_text: str) -> BlockTree:
        """Render raw markdown."""
        ...


def _is_indexed_heading(block: Block) -> bool:
    return (
        block.kind is BlockKind.HEADING
        and block.level is not None
        and block.level <= MAX_ANCHORED_LEVEL
    )


def _is_worth_indexing(text: str) -> bool:
    if len(text) > CONTENT_MIN_LENGTH:
        return True
    lowered = text.lower()
    return any(keyword in lowered for keyword in DOMAIN_KEYWORDS)


def extract_entries(document: DocumentRef, tree: BlockTree) -> list[SearchEntry]:
    """Emit the search entries for one rendered document.

    Heading entries come first, in document order, each with the text of the
    next sibling block as its snippet. Qualifying paragraphs follow, each
    attributed to the nearest preceding heading sibling, or to the document
    itself when no heading precedes it.

    Args:
        document: Manifest entry for the document.
        tree: Rendered block tree.

    Returns:
        Entries in emission order.
    """
    blocks = tree.blocks
    allocator = AnchorAllocator()
    anchors: dict[int, str] = {}
    entries: list[SearchEntry] = []

    for position, block in enumerate(blocks):
        if not _is_indexed_heading(block):
            continue
        anchor = allocator.allocate(block.text)
        anchors[position] = anchor
        following = blocks[position + 1].text if position + 1 < len(blocks) else ""
        entries.append(
            SearchEntry(
                title=block.text,
                anchor_id=anchor,
                document_id=document.id,
                kind=HeadingKind(level=block.level),
                snippet=following[:SNIPPET_MAX_LENGTH],
            )
        )

    for position, block in enumerate(blocks):
        if block.kind is not BlockKind.PARAGRAPH or not _is_worth_indexing(block.text):
            continue

        title, anchor = document.title, ""
        for previous in range(position - 1, -1, -1):
            if previous in anchors:
                title, anchor = blocks[previous].text, anchors[previous]
                break

        entries.append(
            SearchEntry(
                title=title,
                anchor_id=anchor,
                document_id=document.id,
                kind=ContentKind(),
                snippet=block.text[:SNIPPET_MAX_LENGTH],
            )
        )

    return entries


class SearchIndex:
    """Write-once index of every document's headings and notable paragraphs.

    The corpus is static for the life of the process, so the index is built
    at most once. Concurrent callers of build() share the first build.
    """

    def __init__(self, fetch_concurrency: int = 1) -> None:
        """Initialize an empty, unbuilt index.

        Args:
            fetch_concurrency: Documents fetched in parallel during build.
        """
        self._entries: tuple[SearchEntry, ...] = ()
        self._built = False
        self._lock = asyncio.Lock()
        self._fetch_concurrency = max(fetch_concurrency, 1)

    @classmethod
    def from_entries(cls, entries: Iterable[SearchEntry]) -> "SearchIndex":
        """Create an already-built index from existing entries."""
        index = cls()
        index._entries = tuple(entries)
        index._built = True
        return index

    @property
    def is_built(self) -> bool:
        """Whether build() has completed."""
        return self._built

    @property
    def entries(self) -> tuple[SearchEntry, ...]:
        """Indexed entries in manifest order, then emission order."""
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    async def build(
        self,
        documents: Sequence[DocumentRef],
        fetcher: DocumentFetcher,
        renderer: BlockRenderer,
    ) -> tuple[SearchEntry, ...]:
        """Fetch, render and index every document.

        Documents that fail to fetch are logged and skipped. Calling build()
        again after it has completed returns the existing entries untouched.

        Args:
            documents: Documents in manifest order.
            fetcher: Source of raw markdown.
            renderer: Markdown to block tree converter.

        Returns:
            The built entries.
        """
        if self._built:
            return self._entries

        async with self._lock:
            if self._built:
                return self._entries

            start = time.perf_counter()
            trees = await self._load_trees(documents, fetcher, renderer)

            entries: list[SearchEntry] = []
            skipped = 0
            for document, tree in zip(documents, trees):
                if tree is None:
                    skipped += 1
                    continue
                entries.extend(extract_entries(document, tree))

            self._entries = tuple(entries)
            self._built = True

        logger.info(
            "search_index_built",
            document_count=len(documents) - skipped,
            skipped_count=skipped,
            entry_count=len(self._entries),
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return self._entries

    async def _load_trees(
        self,
        documents: Sequence[DocumentRef],
        fetcher: DocumentFetcher,
        renderer: BlockRenderer,
    ) -> list[BlockTree | None]:
        if self._fetch_concurrency == 1:
            return [await self._load_tree(doc, fetcher, renderer) for doc in documents]

        semaphore = asyncio.Semaphore(self._fetch_concurrency)

        async def bounded(document: DocumentRef) -> BlockTree | None:
            async with semaphore:
                return await self._load_tree(document, fetcher, renderer)

        # gather preserves argument order, so entry order matches the manifest.
        return list(await asyncio.gather(*(bounded(doc) for doc in documents)))

    @staticmethod
    async def _load_tree(
        document: DocumentRef,
        fetcher: DocumentFetcher,
        renderer: BlockRenderer,
    ) -> BlockTree | None:
        try:
            raw = await fetcher.fetch(document.id)
        except (DocumentFetchError, SecurityError) as e:
            logger.warning(
                "search_index_document_skipped",
                document_id=document.id,
                error=str(e),
            )
            return None
        return renderer.render(raw)
