"""Allow-list HTML sanitizer for rendered markup.

Only the markup the renderer produces survives: ``span`` with a single
``color: hsl(...)`` declaration, ``br`` and ``b``. Executable and embedding
elements are removed together with their content, every other tag is
unwrapped, every other attribute is dropped.
"""

from __future__ import annotations

import html
import logging
import re
from typing import Dict

from bs4 import BeautifulSoup
from bs4.element import PreformattedString, Tag


LOGGER = logging.getLogger(__name__)

ALLOWED_TAGS = frozenset({"span", "br", "b"})
REMOVED_TAGS = frozenset(
    {"script", "style", "iframe", "object", "embed", "template", "noscript", "svg", "math"}
)

_COLOR_STYLE_RE = re.compile(
    r"^\s*color:\s*hsl\(\s*\d{1,3}\s*,\s*\d{1,3}%\s*,\s*\d{1,3}%\s*\)\s*;?\s*$"
)


def _clean_attrs(tag: Tag) -> Dict[str, str]:
    if tag.name != "span":
        return {}
    style = tag.attrs.get("style")
    if isinstance(style, str) and _COLOR_STYLE_RE.match(style):
        return {"style": style}
    return {}


def _sanitize(markup: str) -> str:
    soup = BeautifulSoup(markup, "html.parser")

    # Comments, doctypes, CDATA and processing instructions.
    for node in [n for n in soup.descendants if isinstance(n, PreformattedString)]:
        node.extract()

    for tag in soup(list(REMOVED_TAGS)):
        if not tag.decomposed:
            tag.decompose()

    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            continue
        tag.attrs = _clean_attrs(tag)

    return soup.decode(formatter="html")


def sanitize_html(markup: str) -> str:
    """Return ``markup`` reduced to the allowed tags and attributes.

    Idempotent. If sanitizing fails the input is returned fully escaped, so
    nothing of it can execute.
    """

    if not markup:
        return ""
    try:
        return _sanitize(markup)
    except Exception as exc:  # noqa: BLE001
        LOGGER.exception(
            "event=sanitize status=error markup_len=%d error=%s",
            len(markup),
            exc.__class__.__name__,
        )
        return html.escape(markup)
