"""Content module: manifest, document sources and rendering."""

from lumadocs.content.fetcher import (
    ContentError,
    DocumentFetcher,
    DocumentFetchError,
    DocumentNotFoundError,
    FileSystemFetcher,
    HttpFetcher,
)
from lumadocs.content.manifest import (
    ManifestLoadError,
    display_name,
    load_manifest,
    parse_manifest,
)
from lumadocs.content.paths import SecurityError, resolve_document_path, validate_document_id
from lumadocs.content.renderer import MarkdownRenderer
from lumadocs.content.schemas import (
    Block,
    BlockKind,
    BlockTree,
    DocumentRef,
    DocumentView,
    ErrorResponse,
    Manifest,
    ManifestFolder,
    ManifestNode,
    OutlineItem,
)
from lumadocs.content.slug import AnchorAllocator, slugify

__all__ = [
    "AnchorAllocator",
    "Block",
    "BlockKind",
    "BlockTree",
    "ContentError",
    "DocumentFetchError",
    "DocumentFetcher",
    "DocumentNotFoundError",
    "DocumentRef",
    "DocumentView",
    "ErrorResponse",
    "FileSystemFetcher",
    "HttpFetcher",
    "Manifest",
    "ManifestFolder",
    "ManifestLoadError",
    "ManifestNode",
    "MarkdownRenderer",
    "OutlineItem",
    "SecurityError",
    "display_name",
    "load_manifest",
    "parse_manifest",
    "resolve_document_path",
    "slugify",
    "validate_document_id",
]
