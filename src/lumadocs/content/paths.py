"""Security-first resolution of document identifiers to files."""
from pathlib import Path

DOCUMENT_SUFFIX = ".md"


class SecurityError(Exception):
    """Raised when a document identifier violates path constraints."""

    def __init__(self, message: str, document_id: str) -> None:
        """Initialize security error.

        Args:
            message: Error description.
            document_id: The offending identifier.
        """
        super().__init__(message)
        self.document_id = document_id


def validate_document_id(document_id: str) -> str:
    """Check that a document identifier is a safe relative path.

    Args:
        document_id: Slash-separated identifier such as ``guide/install``.

    Returns:
        The identifier with surrounding slashes removed.

    Raises:
        SecurityError: On null bytes, traversal segments or absolute paths.
    """
    if "\0" in document_id:
        raise SecurityError("Document id contains null byte", document_id)

    if document_id.startswith("/") or "\\" in document_id:
        raise SecurityError("Document id must be a relative path", document_id)

    parts = document_id.strip("/").split("/")
    if any(part in ("", ".", "..") for part in parts):
        raise SecurityError("Document id contains an invalid path segment", document_id)

    return "/".join(parts)


def resolve_document_path(root: Path, document_id: str) -> Path:
    """Resolve a document identifier to a markdown file under root.

    Args:
        root: Documentation root directory.
        document_id: Identifier to resolve; ``.md`` is appended if missing.

    Returns:
        Absolute path of the markdown file.

    Raises:
        SecurityError: If the identifier is unsafe or escapes root.
    """
    clean = validate_document_id(document_id)
    if not clean.endswith(DOCUMENT_SUFFIX):
        clean = f"{clean}{DOCUMENT_SUFFIX}"

    root_path = root.resolve()
    resolved = (root_path / clean).resolve()

    if not resolved.is_relative_to(root_path):
        raise SecurityError(f"Document resolves outside root: {root_path}", document_id)

    return resolved
