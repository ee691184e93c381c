"""End-to-end highlighting with noun phrases from a parsed pipeline."""

from bs4 import BeautifulSoup

from helpers import span_colors
from noun_highlighter import ColorAssignor, highlight


def _span_texts(markup):
    return [s.get_text() for s in BeautifulSoup(markup, "html.parser").find_all("span")]


def test_repeated_phrase_is_one_span(chunk_extractor):
    result = highlight("the black cat saw the black cat", chunk_extractor, ColorAssignor())
    assert result.repeated_nouns == ["black cat", "cat"]
    assert _span_texts(result.html) == ["black cat", "black cat"]
    assert span_colors(result.html) == {
        "black cat": f"color: {result.colors['black cat']};",
    }


def test_phrase_and_bare_noun_get_their_own_colors(chunk_extractor):
    result = highlight(
        "the black cat saw the black cat and a cat", chunk_extractor, ColorAssignor()
    )
    assert _span_texts(result.html) == ["black cat", "black cat", "cat"]
    colors = span_colors(result.html)
    assert colors["black cat"] == f"color: {result.colors['black cat']};"
    assert colors["cat"] == f"color: {result.colors['cat']};"
    assert result.colors["black cat"] != result.colors["cat"]
