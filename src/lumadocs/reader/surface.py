"""Server-side model of a reader's visible document pane."""
from collections import OrderedDict
from itertools import count
from typing import Literal

import structlog
from pydantic import BaseModel, Field

from lumadocs.content.schemas import Block, BlockKind, BlockTree

logger = structlog.get_logger()

# Layout units: one source line of text and the gap between blocks.
LINE_HEIGHT = 24
BLOCK_SPACING = 16
MAX_SESSIONS = 1000

ScrollBehavior = Literal["auto", "smooth"]


class ElementHandle(BaseModel):
    """A located anchor on the mounted surface.

    Attributes:
        anchor_id: Anchor that was located.
        top: Vertical position of the element, in layout units.
    """

    anchor_id: str
    top: float


class ReaderState(BaseModel):
    """Snapshot of what a reader currently sees.

    Attributes:
        session_id: Reader session identifier.
        document_id: Mounted document, if any.
        title: Mounted document's display name.
        scroll_top: Current scroll position in layout units.
        scroll_behavior: How the last scroll was performed.
        highlighted: Anchors currently flashed.
        error: Error panel message; set when the last load failed.
    """

    session_id: str
    document_id: str | None = None
    title: str | None = None
    scroll_top: float = 0
    scroll_behavior: ScrollBehavior = "auto"
    highlighted: list[str] = Field(default_factory=list)
    error: str | None = None


def _block_height(block: Block) -> int:
    if block.kind is BlockKind.RULE:
        return BLOCK_SPACING
    return block.line_count * LINE_HEIGHT + BLOCK_SPACING


class ReaderSurface:
    """The pane a document is mounted on.

    Mounting is synchronous; anchors can be located as soon as mount()
    returns. Highlights are tracked per flash so overlapping flashes of the
    same anchor expire independently.
    """

    def __init__(self, session_id: str) -> None:
        """Initialize an empty surface.

        Args:
            session_id: Owning reader session.
        """
        self.session_id = session_id
        self._document_id: str | None = None
        self._title: str | None = None
        self._positions: dict[str, float] = {}
        self._scroll_top: float = 0
        self._scroll_behavior: ScrollBehavior = "auto"
        self._highlights: dict[int, str] = {}
        self._highlight_ids = count(1)
        self._error: str | None = None

    @property
    def document_id(self) -> str | None:
        """Currently mounted document."""
        return self._document_id

    def mount(self, document_id: str, title: str, tree: BlockTree) -> None:
        """Replace the surface contents with a rendered document.

        Args:
            document_id: Document being shown.
            title: Display name.
            tree: Rendered block tree.
        """
        positions: dict[str, float] = {}
        top = 0
        for block in tree.blocks:
            if block.anchor_id:
                positions[block.anchor_id] = top
            top += _block_height(block)

        self._document_id = document_id
        self._title = title
        self._positions = positions
        self._highlights.clear()
        self._error = None
        logger.debug("surface_mounted", session_id=self.session_id, document_id=document_id)

    def locate(self, anchor_id: str) -> ElementHandle | None:
        """Find an anchored element on the mounted document."""
        top = self._positions.get(anchor_id)
        if top is None:
            return None
        return ElementHandle(anchor_id=anchor_id, top=top)

    def scroll_to(self, top: float, behavior: ScrollBehavior = "auto") -> None:
        """Scroll the pane; negative positions clamp to the top."""
        self._scroll_top = max(top, 0)
        self._scroll_behavior = behavior

    def add_highlight(self, anchor_id: str) -> int:
        """Flash an anchor.

        Returns:
            Token to pass to remove_highlight().
        """
        token = next(self._highlight_ids)
        self._highlights[token] = anchor_id
        return token

    def remove_highlight(self, token: int) -> None:
        """End a flash; unknown tokens (e.g. cleared by a remount) are ignored."""
        self._highlights.pop(token, None)

    def show_error(self, message: str) -> None:
        """Replace the pane with an error panel."""
        self._document_id = None
        self._title = None
        self._positions = {}
        self._highlights.clear()
        self._scroll_top = 0
        self._error = message

    def state(self) -> ReaderState:
        """Snapshot the surface for display."""
        return ReaderState(
            session_id=self.session_id,
            document_id=self._document_id,
            title=self._title,
            scroll_top=self._scroll_top,
            scroll_behavior=self._scroll_behavior,
            highlighted=sorted(set(self._highlights.values())),
            error=self._error,
        )


class ReaderSessions:
    """Bounded registry of reader surfaces keyed by session id.

    The least recently used surface is evicted once the limit is reached.
    """

    def __init__(self, max_sessions: int = MAX_SESSIONS) -> None:
        """Initialize registry.

        Args:
            max_sessions: Maximum number of live surfaces.
        """
        self._surfaces: OrderedDict[str, ReaderSurface] = OrderedDict()
        self._max_sessions = max_sessions

    def __len__(self) -> int:
        return len(self._surfaces)

    def get(self, session_id: str) -> ReaderSurface | None:
        """Return an existing surface without creating one."""
        surface = self._surfaces.get(session_id)
        if surface is not None:
            self._surfaces.move_to_end(session_id)
        return surface

    def get_or_create(self, session_id: str) -> ReaderSurface:
        """Return the session's surface, creating it on first use."""
        surface = self.get(session_id)
        if surface is not None:
            return surface

        if len(self._surfaces) >= self._max_sessions:
            evicted, _ = self._surfaces.popitem(last=False)
            logger.info("reader_session_evicted", session_id=evicted)

        surface = ReaderSurface(session_id)
        self._surfaces[session_id] = surface
        return surface
