"""Pydantic schemas for index entries and search API responses."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

SNIPPET_MAX_LENGTH = 300


class HeadingKind(BaseModel):
    """Entry produced from a heading."""

    model_config = ConfigDict(frozen=True)

    type: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=4)


class ContentKind(BaseModel):
    """Entry produced from a paragraph."""

    model_config = ConfigDict(frozen=True)

    type: Literal["content"] = "content"


EntryKind = Annotated[HeadingKind | ContentKind, Field(discriminator="type")]


class SearchEntry(BaseModel):
    """One indexed, scorable unit of text.

    Attributes:
        title: Owning heading text, or the document display name.
        anchor_id: Anchor unique within the document; empty lands at the top.
        document_id: Source document identifier.
        kind: Heading (with level) or paragraph content.
        snippet: Display and matching text, at most 300 characters.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    anchor_id: str
    document_id: str
    kind: EntryKind
    snippet: str = Field(default="", max_length=SNIPPET_MAX_LENGTH)


class SearchResult(BaseModel):
    """Individual search result for display.

    Attributes:
        title: Entry title.
        kind: ``heading`` or ``content``.
        level: Heading level, for heading results.
        snippet: Snippet with <mark> highlight tags.
        document_id: Document to navigate to.
        anchor_id: Anchor to scroll to; empty for document top.
        score: Additive relevance score (higher is better).
    """

    title: str
    kind: Literal["heading", "content"]
    level: int | None = None
    snippet: str = Field(description="Snippet with <mark> highlight tags")
    document_id: str
    anchor_id: str
    score: int


class SearchResponse(BaseModel):
    """Search response envelope.

    Attributes:
        query: The original search query string.
        results: Ranked results, at most ten.
        total: Number of results returned.
    """

    query: str
    results: list[SearchResult]
    total: int
