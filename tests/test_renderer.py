"""Markdown renderer tests."""

from lumadocs.content.renderer import MarkdownRenderer
from lumadocs.content.schemas import BlockKind

DOCUMENT = """\
# Getting Started!

Install the compiler first.

## ???

- first item
- second item

```lx
let x: int = 1;
```

> Note: quoted text

##### Minor heading

---
"""


def test_render_produces_top_level_blocks_in_order() -> None:
    """Each top-level markdown block becomes one sibling block."""
    tree = MarkdownRenderer().render(DOCUMENT)
    kinds = [block.kind for block in tree.blocks]
    assert kinds == [
        BlockKind.HEADING,
        BlockKind.PARAGRAPH,
        BlockKind.HEADING,
        BlockKind.LIST,
        BlockKind.CODE,
        BlockKind.QUOTE,
        BlockKind.HEADING,
        BlockKind.RULE,
    ]


def test_render_assigns_heading_anchors() -> None:
    """Headings get slug anchors, with positional fallback for empty slugs."""
    tree = MarkdownRenderer().render(DOCUMENT)
    headings = tree.headings()
    assert [(h.text, h.level, h.anchor_id) for h in headings] == [
        ("Getting Started!", 1, "getting-started"),
        ("???", 2, "heading-1"),
        ("Minor heading", 5, None),
    ]


def test_render_flattens_container_text() -> None:
    """List and quote blocks carry their inner text."""
    tree = MarkdownRenderer().render(DOCUMENT)
    assert tree.blocks[3].text == "first item second item"
    assert tree.blocks[5].text == "Note: quoted text"


def test_render_code_block_language_alias() -> None:
    """The lx fence alias is normalised to luma."""
    tree = MarkdownRenderer().render(DOCUMENT)
    code = tree.blocks[4]
    assert code.language == "luma"
    assert code.text == "let x: int = 1;"

    html, _ = MarkdownRenderer().render_html(DOCUMENT)
    assert 'class="language-luma"' in html


def test_render_inline_markup_is_stripped() -> None:
    """Inline formatting does not leak into block text."""
    tree = MarkdownRenderer().render("Use **`alloc`** and [free](free.md).\n")
    assert tree.blocks[0].text == "Use alloc and free."


def test_render_html_heading_ids_match_tree() -> None:
    """Rendered HTML carries the same anchors as the block tree."""
    html, tree = MarkdownRenderer().render_html(DOCUMENT)
    for heading in tree.headings():
        if heading.anchor_id:
            assert f'id="{heading.anchor_id}"' in html
    assert "<h5>Minor heading</h5>" in html
