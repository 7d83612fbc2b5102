"""Markdown rendering into a flat block tree and anchored HTML."""
import re

import structlog
from markdown_it import MarkdownIt
from markdown_it.token import Token

from lumadocs.content.schemas import Block, BlockKind, BlockTree
from lumadocs.content.slug import MAX_ANCHORED_LEVEL, AnchorAllocator

logger = structlog.get_logger()

_CONTAINER_KINDS: dict[str, BlockKind] = {
    "bullet_list_open": BlockKind.LIST,
    "ordered_list_open": BlockKind.LIST,
    "blockquote_open": BlockKind.QUOTE,
    "table_open": BlockKind.TABLE,
}

# Fence info strings that name the Luma language.
_LANGUAGE_ALIASES: dict[str, str] = {"lx": "luma"}

_TAG_PATTERN = re.compile(r"<[^>]+>")
_SPACE_PATTERN = re.compile(r"\s+")


def _inline_text(token: Token) -> str:
    """Flatten an inline token to the text a reader would see."""
    parts: list[str] = []
    for child in token.children or []:
        if child.type in ("text", "code_inline", "image"):
            parts.append(child.content)
        elif child.type in ("softbreak", "hardbreak"):
            parts.append(" ")
    return "".join(parts).strip()


def _line_count(token: Token) -> int:
    if token.map:
        return max(token.map[1] - token.map[0], 1)
    return 1


def _find_close(tokens: list[Token], start: int) -> int:
    """Index of the token closing the container opened at start."""
    level = tokens[start].level
    for j in range(start + 1, len(tokens)):
        if tokens[j].nesting == -1 and tokens[j].level == level:
            return j
    return len(tokens) - 1


class MarkdownRenderer:
    """Renders documentation markdown.

    Produces the sibling block tree used for indexing and navigation, and
    HTML whose heading ids follow the same anchor convention.
    """

    def __init__(self) -> None:
        """Initialize the markdown-it parser (CommonMark plus tables)."""
        self._md = MarkdownIt("commonmark", {"breaks": True}).enable("table")

    def render(self, raw_text: str) -> BlockTree:
        """Convert markdown into a block tree.

        Args:
            raw_text: Raw markdown document.

        Returns:
            Top-level blocks in document order.
        """
        tree, _ = self._parse(raw_text)
        return tree

    def render_html(self, raw_text: str) -> tuple[str, BlockTree]:
        """Convert markdown into HTML and its block tree.

        Args:
            raw_text: Raw markdown document.

        Returns:
            Tuple of (HTML with ``id`` attributes on headings, block tree).
        """
        tree, tokens = self._parse(raw_text)
        html = self._md.renderer.render(tokens, self._md.options, {})
        return html, tree

    def _parse(self, raw_text: str) -> tuple[BlockTree, list[Token]]:
        tokens = self._md.parse(raw_text)
        allocator = AnchorAllocator()
        blocks: list[Block] = []

        i = 0
        while i < len(tokens):
            token = tokens[i]

            if token.type == "heading_open":
                text = _inline_text(tokens[i + 1])
                level = int(token.tag[1:])
                anchor: str | None = None
                if level <= MAX_ANCHORED_LEVEL:
                    anchor = allocator.allocate(text)
                    token.attrSet("id", anchor)
                blocks.append(
                    Block(
                        kind=BlockKind.HEADING,
                        text=text,
                        level=level,
                        anchor_id=anchor,
                        line_count=_line_count(token),
                    )
                )
                i += 3
                continue

            if token.type == "paragraph_open":
                blocks.append(
                    Block(
                        kind=BlockKind.PARAGRAPH,
                        text=_inline_text(tokens[i + 1]),
                        line_count=_line_count(token),
                    )
                )
                i += 3
                continue

            if token.type in ("fence", "code_block"):
                words = token.info.split(maxsplit=1)
                info = words[0].lower() if words else ""
                language = _LANGUAGE_ALIASES.get(info, info)
                if language != info:
                    # rendered as class="language-luma"
                    token.info = " ".join([language, *words[1:]])
                blocks.append(
                    Block(
                        kind=BlockKind.CODE,
                        text=token.content.rstrip("\n"),
                        language=language or None,
                        line_count=_line_count(token),
                    )
                )
            elif token.type == "hr":
                blocks.append(Block(kind=BlockKind.RULE))
            elif token.type == "html_block":
                text = _SPACE_PATTERN.sub(" ", _TAG_PATTERN.sub(" ", token.content)).strip()
                blocks.append(
                    Block(kind=BlockKind.HTML, text=text, line_count=_line_count(token))
                )
            elif token.nesting == 1:
                close = _find_close(tokens, i)
                inner = " ".join(
                    _inline_text(t) for t in tokens[i + 1 : close] if t.type == "inline"
                )
                kind = _CONTAINER_KINDS.get(token.type)
                if kind is None:
                    logger.debug("renderer_unknown_container", token_type=token.type)
                    kind = BlockKind.HTML
                blocks.append(
                    Block(kind=kind, text=inner.strip(), line_count=_line_count(token))
                )
                i = close

            i += 1

        return BlockTree(blocks=blocks), tokens
