"""Manifest loading: which documents exist and how they are grouped."""
from typing import Any

import structlog
import yaml

from lumadocs.content.fetcher import DocumentFetcher, DocumentFetchError, DocumentNotFoundError
from lumadocs.content.paths import SecurityError, validate_document_id
from lumadocs.content.schemas import DocumentRef, Manifest, ManifestFolder

logger = structlog.get_logger()

# Tried in order when the corpus ships without a manifest file.
FALLBACK_DOCUMENTS: tuple[str, ...] = ("docs", "DOCS", "README")


class ManifestLoadError(Exception):
    """Raised when the manifest is missing or malformed."""

    def __init__(self, message: str, source: str) -> None:
        """Initialize manifest error.

        Args:
            message: Error description.
            source: Manifest file or location that failed.
        """
        super().__init__(message)
        self.source = source


def display_name(document_id: str) -> str:
    """Derive a human-readable name from a document identifier.

    Args:
        document_id: Identifier such as ``language/control-flow``.

    Returns:
        Title-cased last segment, e.g. ``Control Flow``.
    """
    stem = document_id.rstrip("/").rsplit("/", 1)[-1]
    words = stem.replace("_", " ").replace("-", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words) or document_id


def _parse_document(raw: Any, folder: str | None, source: str) -> DocumentRef:
    if isinstance(raw, str):
        document_id, title = raw, None
    elif isinstance(raw, dict) and isinstance(raw.get("id"), str):
        document_id, title = raw["id"], raw.get("title")
    else:
        raise ManifestLoadError(f"Invalid document entry: {raw!r}", source)

    try:
        document_id = validate_document_id(document_id)
    except SecurityError as e:
        raise ManifestLoadError(f"Invalid document id {document_id!r}: {e}", source) from e

    return DocumentRef(
        id=document_id,
        title=str(title) if title else display_name(document_id),
        folder=folder,
    )


def parse_manifest(data: object, source: str = "<manifest>") -> Manifest:
    """Build a manifest from decoded YAML.

    Accepts either a bare list or a mapping with a ``documents`` list. Items
    are document ids, ``{id, title}`` mappings, or ``{folder, documents}``
    groups (one level deep).

    Args:
        data: Decoded YAML document.
        source: Location used in error messages.

    Returns:
        Validated manifest.

    Raises:
        ManifestLoadError: If the structure is invalid or lists no documents.
    """
    items = data.get("documents") if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise ManifestLoadError("Manifest must contain a list of documents", source)

    entries: list[DocumentRef | ManifestFolder] = []
    seen: set[str] = set()

    for item in items:
        if isinstance(item, dict) and "folder" in item:
            name = str(item["folder"])
            children = item.get("documents")
            if not isinstance(children, list):
                raise ManifestLoadError(f"Folder {name!r} has no document list", source)
            folder = ManifestFolder(
                name=name,
                documents=[_parse_document(child, name, source) for child in children],
            )
            new_refs = folder.documents
            entries.append(folder)
        else:
            ref = _parse_document(item, None, source)
            new_refs = [ref]
            entries.append(ref)

        for ref in new_refs:
            if ref.id in seen:
                raise ManifestLoadError(f"Duplicate document id {ref.id!r}", source)
            seen.add(ref.id)

    if not seen:
        raise ManifestLoadError("Manifest lists no documents", source)

    return Manifest(entries=entries)


async def load_manifest(fetcher: DocumentFetcher, manifest_file: str) -> Manifest:
    """Load the manifest, falling back to a single well-known document.

    Args:
        fetcher: Source for the manifest and fallback documents.
        manifest_file: Manifest filename relative to the documentation root.

    Returns:
        Loaded manifest.

    Raises:
        ManifestLoadError: If neither the manifest nor a fallback document
            can be read, or the manifest is malformed.
    """
    try:
        raw = await fetcher.read_file(manifest_file)
    except DocumentNotFoundError:
        logger.info("manifest_not_found", manifest_file=manifest_file)
        return await _fallback_manifest(fetcher, manifest_file)
    except (DocumentFetchError, SecurityError) as e:
        raise ManifestLoadError(f"Failed to read manifest: {e}", manifest_file) from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ManifestLoadError(f"Manifest is not valid YAML: {e}", manifest_file) from e

    manifest = parse_manifest(data, manifest_file)
    logger.info("manifest_loaded", document_count=len(manifest.documents()))
    return manifest


async def _fallback_manifest(fetcher: DocumentFetcher, manifest_file: str) -> Manifest:
    for candidate in FALLBACK_DOCUMENTS:
        try:
            await fetcher.fetch(candidate)
        except DocumentNotFoundError:
            continue
        except DocumentFetchError as e:
            logger.warning("manifest_fallback_failed", candidate=candidate, error=str(e))
            continue
        logger.info("manifest_fallback_used", document_id=candidate)
        return Manifest(entries=[DocumentRef(id=candidate, title=display_name(candidate))])

    raise ManifestLoadError(
        f"No manifest and none of {', '.join(FALLBACK_DOCUMENTS)} found",
        manifest_file,
    )
