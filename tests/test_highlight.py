"""Term highlighter tests."""

from lumadocs.search.highlight import highlight


def test_highlight_preserves_original_case() -> None:
    """The matched substring keeps the text's casing."""
    assert highlight("Hello World", "wor") == "Hello <mark>Wor</mark>ld"


def test_highlight_wraps_every_occurrence() -> None:
    """All occurrences of a word are wrapped."""
    assert highlight("let a; LET b", "let") == "<mark>let</mark> a; <mark>LET</mark> b"


def test_highlight_ignores_single_character_words() -> None:
    """Words of length one are not highlighted."""
    assert highlight("a free b", "a free") == "a <mark>free</mark> b"


def test_highlight_no_match_returns_text_unchanged() -> None:
    """Text without matches is returned as-is."""
    assert highlight("struct Point", "enum") == "struct Point"


def test_highlight_escapes_regex_characters() -> None:
    """Query words are matched literally."""
    assert highlight("call f(x) now", "f(x)") == "call <mark>f(x)</mark> now"


def test_highlight_overlapping_words_nest_markers() -> None:
    """Overlapping words wrap the same text twice."""
    assert highlight("alloc", "alloc all") == "<mark><mark>all</mark>oc</mark>"


def test_highlight_escapes_snippet_markup() -> None:
    """Angle brackets in the text are escaped; only markers are markup."""
    assert (
        highlight("Use cast<int>(x) & sizeof<T>", "cast")
        == "Use <mark>cast</mark>&lt;int&gt;(x) &amp; sizeof&lt;T&gt;"
    )


def test_highlight_matches_words_with_markup_characters() -> None:
    """Query words are matched against the raw text, then escaped."""
    assert highlight("call cast<int> here", "<int>") == "call cast<mark>&lt;int&gt;</mark> here"


def test_highlight_escapes_text_without_matches() -> None:
    """Text is escaped even when nothing matches."""
    assert highlight("a < b", "zz") == "a &lt; b"
