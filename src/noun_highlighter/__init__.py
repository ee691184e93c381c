"""Public API for the repeated-noun highlighter.

This package exposes the stable public API:
- `HighlightSession`
- `highlight_text`
- `highlight_payload_to_dict`
- `highlight_payload_to_json`
- `NounExtractor`
- `ColorAssignor`
- `render`
- `sanitize_html`
"""

from __future__ import annotations

from .api import (
    highlight_payload_to_dict,
    highlight_payload_to_json,
    highlight_text,
)
from .colors import ColorAssignor, ColorSpaceExhaustedError, color_for
from .config import HighlighterConfig
from .extractor import NounExtractor
from .models import HSLColor, RenderResult, SavedItem
from .renderer import apply_bionic_reading, render
from .repetition import count_occurrences, find_repeated_nouns
from .sanitizer import sanitize_html
from .saved import SavedItemNotFoundError, SavedTextStore
from .session import HighlightSession, highlight
from .storage import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "HighlightSession",
    "highlight",
    "highlight_text",
    "highlight_payload_to_dict",
    "highlight_payload_to_json",
    "NounExtractor",
    "ColorAssignor",
    "ColorSpaceExhaustedError",
    "color_for",
    "HighlighterConfig",
    "HSLColor",
    "RenderResult",
    "SavedItem",
    "apply_bionic_reading",
    "render",
    "count_occurrences",
    "find_repeated_nouns",
    "sanitize_html",
    "SavedItemNotFoundError",
    "SavedTextStore",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
]
