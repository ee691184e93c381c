"""Assertion helpers shared by test modules."""

from typing import Dict

from bs4 import BeautifulSoup


def span_colors(markup: str) -> Dict[str, str]:
    """Map each highlighted fragment to its style attribute."""

    soup = BeautifulSoup(markup, "html.parser")
    return {span.get_text(): span["style"] for span in soup.find_all("span")}
