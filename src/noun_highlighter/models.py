"""Data models for the noun highlighter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class HSLColor:
    """A color expressed as hue/saturation/lightness.

    Attributes
    ----------
    hue:
        Hue angle in degrees, 0-359.
    saturation:
        Saturation in percent.
    lightness:
        Lightness in percent.
    """

    hue: int
    saturation: int = 100
    lightness: int = 50

    def __str__(self) -> str:
        return f"hsl({self.hue}, {self.saturation}%, {self.lightness}%)"


@dataclass(frozen=True)
class SavedItem:
    """A snapshot of text saved for later recall.

    Attributes
    ----------
    text:
        The saved text. Never empty.
    date:
        Display-formatted timestamp; also the key used to delete or load.
    """

    text: str
    date: str

    def to_dict(self) -> Dict[str, str]:
        return {"text": self.text, "date": self.date}


@dataclass
class RenderResult:
    """Render-ready output of one pipeline run."""

    text: str
    html: str
    repeated_nouns: List[str] = field(default_factory=list)
    colors: Dict[str, str] = field(default_factory=dict)
    bionic_reading: bool = False
    revision: int = 0
