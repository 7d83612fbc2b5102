"""Heading anchor generation shared by the renderer and the search index."""

import re

import structlog

logger = structlog.get_logger()

_STRIP_PATTERN = re.compile(r"[^\w\s-]")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_HYPHEN_PATTERN = re.compile(r"-+")

# Headings deeper than this get no anchor and are not indexed.
MAX_ANCHORED_LEVEL = 4


def slugify(text: str) -> str:
    """Turn heading text into a URL-fragment friendly identifier.

    The result may be empty (e.g. for punctuation-only headings); callers
    are expected to substitute a positional fallback.

    Args:
        text: Heading text as displayed.

    Returns:
        Lowercase hyphen-separated slug, possibly empty.
    """
    slug = _STRIP_PATTERN.sub("", text.lower())
    slug = _WHITESPACE_PATTERN.sub("-", slug)
    slug = _HYPHEN_PATTERN.sub("-", slug)
    return slug.strip("-")


class AnchorAllocator:
    """Assigns unique heading anchors within a single document.

    Anchors are handed out in document order. Empty slugs fall back to
    ``heading-<ordinal>`` and repeats receive a numeric suffix, so two
    walks over the same headings always produce the same anchors.
    """

    def __init__(self) -> None:
        """Initialize an allocator for one document."""
        self._ordinal = 0
        self._seen: dict[str, int] = {}

    def allocate(self, text: str) -> str:
        """Allocate the anchor for the next heading.

        Args:
            text: Heading text.

        Returns:
            Non-empty anchor unique among anchors from this allocator.
        """
        base = slugify(text) or f"heading-{self._ordinal}"
        self._ordinal += 1

        anchor = base
        while anchor in self._seen:
            self._seen[base] += 1
            anchor = f"{base}-{self._seen[base]}"
        self._seen[anchor] = 0
        if anchor != base:
            logger.debug("anchor_deduplicated", base=base, anchor=anchor)
        return anchor
