"""Markup rendering of text with colored repeated nouns."""

from __future__ import annotations

import html
import math
import re
from typing import List, Mapping, Pattern

from .config import DEFAULT_BIONIC_FRACTION, DEFAULT_TAB_WIDTH
from .models import HSLColor
from .repetition import word_pattern_source
from .sanitizer import sanitize_html


LINE_BREAK = "<br/>"
NBSP = "&nbsp;"

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")
# Tags and character references are passed through by the bionic pass.
_MARKUP_RE = re.compile(r"(<[^>]*>|&#?\w+;)")
_WORD_RE = re.compile(r"[^\W\d_]+")


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def _span(fragment: str, color: object) -> str:
    return f'<span style="color: {color};">{_escape(fragment)}</span>'


def _alternation(nouns: List[str]) -> Pattern[str]:
    return re.compile(
        "|".join(f"({word_pattern_source(noun)})" for noun in nouns),
        re.IGNORECASE,
    )


def _ordered_nouns(colors: Mapping[str, object]) -> List[str]:
    # Longest first so "ice cream" wins over "cream" at the same position.
    return sorted((n for n in colors if n), key=lambda n: (-len(n), n))


def build_markup(text: str, colors: Mapping[str, object]) -> str:
    """Escape ``text`` and wrap every occurrence of a colored noun in a span.

    Matching runs on the raw text in a single pass, never on partially built
    markup. Each occurrence keeps its own casing; the noun key only selects
    the color.
    """

    nouns = _ordered_nouns(colors)
    if not nouns:
        return _escape(text)

    pattern = _alternation(nouns)
    parts: List[str] = []
    pos = 0
    for match in pattern.finditer(text):
        noun = nouns[match.lastindex - 1]
        parts.append(_escape(text[pos : match.start()]))
        parts.append(_span(match.group(0), colors[noun]))
        pos = match.end()
    parts.append(_escape(text[pos:]))
    return "".join(parts)


def convert_whitespace(markup: str, tab_width: int = DEFAULT_TAB_WIDTH) -> str:
    """Turn line breaks into ``<br/>`` and tabs into non-breaking spaces."""

    markup = _NEWLINE_RE.sub(LINE_BREAK, markup)
    return markup.replace("\t", NBSP * tab_width)


def bold_length(word_length: int, fraction: float = DEFAULT_BIONIC_FRACTION) -> int:
    """Number of leading characters emphasized for a word of this length."""

    if word_length <= 0:
        return 0
    if word_length <= 3:
        return 1
    return max(1, math.ceil(word_length * fraction))


def _emphasize(match: "re.Match[str]", fraction: float) -> str:
    word = match.group(0)
    cut = bold_length(len(word), fraction)
    return f"<b>{word[:cut]}</b>{word[cut:]}"


def apply_bionic_reading(markup: str, fraction: float = DEFAULT_BIONIC_FRACTION) -> str:
    """Emphasize the leading part of every word in the text nodes of ``markup``."""

    pieces = _MARKUP_RE.split(markup)
    for index in range(0, len(pieces), 2):
        pieces[index] = _WORD_RE.sub(lambda m: _emphasize(m, fraction), pieces[index])
    return "".join(pieces)


def render(
    text: str,
    colors: Mapping[str, HSLColor],
    bionic_reading: bool = False,
    tab_width: int = DEFAULT_TAB_WIDTH,
    bionic_fraction: float = DEFAULT_BIONIC_FRACTION,
) -> str:
    """Render ``text`` to sanitized markup.

    ``colors`` must hold only the nouns to highlight, usually the currently
    repeated ones.
    """

    markup = build_markup(text, colors)
    markup = convert_whitespace(markup, tab_width)
    if bionic_reading:
        markup = apply_bionic_reading(markup, bionic_fraction)
    return sanitize_html(markup)

