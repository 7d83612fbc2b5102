"""Heading slug and anchor allocation tests."""

from lumadocs.content.slug import AnchorAllocator, slugify


def test_slugify_strips_punctuation() -> None:
    """Punctuation is dropped and words are hyphen-joined."""
    assert slugify("Getting Started!") == "getting-started"


def test_slugify_punctuation_only_is_empty() -> None:
    """A heading with no word characters yields an empty slug."""
    assert slugify("???") == ""


def test_slugify_collapses_whitespace_and_hyphens() -> None:
    """Runs of whitespace and hyphens collapse; edges are trimmed."""
    assert slugify("  Memory  --  Allocation - ") == "memory-allocation"


def test_slugify_keeps_underscores_and_digits() -> None:
    """Underscores and digits are word characters."""
    assert slugify("size_of 2 Types") == "size_of-2-types"


def test_allocator_falls_back_to_ordinal() -> None:
    """Empty slugs become heading-<ordinal> counted across all headings."""
    allocator = AnchorAllocator()
    assert allocator.allocate("Intro") == "intro"
    assert allocator.allocate("???") == "heading-1"


def test_allocator_deduplicates_repeats() -> None:
    """Repeated headings get numeric suffixes."""
    allocator = AnchorAllocator()
    anchors = [allocator.allocate("Example") for _ in range(3)]
    assert anchors == ["example", "example-1", "example-2"]


def test_allocator_avoids_existing_suffixed_slug() -> None:
    """A suffix that collides with a real heading is skipped."""
    allocator = AnchorAllocator()
    assert allocator.allocate("Example 1") == "example-1"
    assert allocator.allocate("Example") == "example"
    assert allocator.allocate("Example") == "example-2"
