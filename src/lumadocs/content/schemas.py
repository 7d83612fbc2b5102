"""Pydantic schemas for manifests, rendered blocks and content responses."""

from enum import Enum

from pydantic import BaseModel, Field


class DocumentRef(BaseModel):
    """A document listed in the manifest.

    Attributes:
        id: Document identifier, a slash-separated path without extension.
        title: Display name used when no heading applies.
        folder: Name of the folder grouping this document, if any.
    """

    id: str = Field(min_length=1)
    title: str
    folder: str | None = None


class ManifestFolder(BaseModel):
    """Named group of documents in the sidebar."""

    name: str = Field(min_length=1)
    documents: list[DocumentRef]


class Manifest(BaseModel):
    """Ordered description of the documentation corpus.

    Attributes:
        entries: Top-level documents and folders in navigation order.
    """

    entries: list[DocumentRef | ManifestFolder]

    def documents(self) -> list[DocumentRef]:
        """Flatten folders into a single list in manifest order."""
        flat: list[DocumentRef] = []
        for entry in self.entries:
            if isinstance(entry, ManifestFolder):
                flat.extend(entry.documents)
            else:
                flat.append(entry)
        return flat

    def find(self, document_id: str) -> DocumentRef | None:
        """Look up a document by id."""
        for document in self.documents():
            if document.id == document_id:
                return document
        return None


class BlockKind(str, Enum):
    """Kinds of top-level rendered blocks."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    CODE = "code"
    LIST = "list"
    QUOTE = "quote"
    TABLE = "table"
    RULE = "rule"
    HTML = "html"


class Block(BaseModel):
    """A top-level block in a rendered document.

    Attributes:
        kind: Block type.
        text: Plain text content (no markup).
        level: Heading level 1-6, for headings only.
        anchor_id: Scroll target id, for headings of level 1-4 only.
        language: Fence info string, for code blocks only.
        line_count: Number of source lines the block spans.
    """

    kind: BlockKind
    text: str = ""
    level: int | None = Field(default=None, ge=1, le=6)
    anchor_id: str | None = None
    language: str | None = None
    line_count: int = 1


class BlockTree(BaseModel):
    """Ordered sibling blocks of a rendered document."""

    blocks: list[Block]

    def headings(self) -> list[Block]:
        """Return heading blocks in document order."""
        return [b for b in self.blocks if b.kind is BlockKind.HEADING]


class ManifestNode(BaseModel):
    """Sidebar tree node."""

    name: str
    document_id: str | None = None
    type: str = Field(description="'document' or 'folder'")
    children: list["ManifestNode"] | None = None


class OutlineItem(BaseModel):
    """Heading entry in a document outline."""

    text: str
    level: int
    anchor_id: str


class DocumentView(BaseModel):
    """Rendered document response."""

    id: str
    title: str
    html: str = Field(description="Rendered HTML with heading ids")
    outline: list[OutlineItem]


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
