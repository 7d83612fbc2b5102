"""Query term highlighting for result snippets."""

import html
import re
from typing import NamedTuple

from lumadocs.search.ranker import query_words

MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"


class _Segment(NamedTuple):
    text: str
    is_marker: bool = False


def _wrap_matches(segment: _Segment, pattern: re.Pattern[str]) -> list[_Segment]:
    if segment.is_marker:
        return [segment]

    pieces: list[_Segment] = []
    last = 0
    for match in pattern.finditer(segment.text):
        pieces.append(_Segment(segment.text[last : match.start()]))
        pieces.append(_Segment(MARK_OPEN, is_marker=True))
        pieces.append(_Segment(match.group(0)))
        pieces.append(_Segment(MARK_CLOSE, is_marker=True))
        last = match.end()
    pieces.append(_Segment(segment.text[last:]))
    return pieces


def highlight(text: str, query: str) -> str:
    """Wrap every case-insensitive occurrence of each query word in <mark>.

    Words are applied one after another in query order without masking
    earlier replacements, so overlapping words (``"alloc all"``) can nest
    markers. Original casing of the text is preserved. The text itself is
    HTML-escaped, so only the markers are markup.

    Args:
        text: Snippet or title to decorate.
        query: Raw query text.

    Returns:
        Escaped text with highlight markers inserted.
    """
    segments = [_Segment(text)]
    for word in query_words(query):
        pattern = re.compile(re.escape(word), re.IGNORECASE)
        segments = [piece for segment in segments for piece in _wrap_matches(segment, pattern)]

    return "".join(
        segment.text if segment.is_marker else html.escape(segment.text)
        for segment in segments
    )
