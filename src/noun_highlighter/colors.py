"""Stable, collision-free color assignment for repeated nouns.

Colors are derived from a hash of the noun, so the same noun gets the same
color in every session unless it collides with a color already handed out.
On collision the hue is probed with a stride coprime with 360, which visits
every hue once; when a lightness band is full the next band is used. The
color space is finite (``len(LIGHTNESS_LADDER) * 360`` colors) and running
out raises ``ColorSpaceExhaustedError`` instead of looping forever.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Dict, Iterable, Mapping, MutableMapping, MutableSet, Set

from .models import HSLColor


LOGGER = logging.getLogger(__name__)

HUE_COUNT = 360
HUE_STRIDE = 137
SATURATION = 100
LIGHTNESS_LADDER = (50, 40, 60, 35, 65, 45, 55)


class ColorSpaceExhaustedError(RuntimeError):
    """Raised when every color of the palette is already in use."""


def base_hue(noun: str) -> int:
    digest = hashlib.sha256(noun.encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big") % HUE_COUNT


def color_for(
    noun: str,
    color_map: MutableMapping[str, HSLColor],
    used_colors: MutableSet[HSLColor],
) -> HSLColor:
    """Return the color of ``noun``, assigning a fresh one if needed.

    Mutates ``color_map`` and ``used_colors`` when a new color is issued.
    """

    existing = color_map.get(noun)
    if existing is not None:
        return existing

    hue0 = base_hue(noun)
    for lightness in LIGHTNESS_LADDER:
        for step in range(HUE_COUNT):
            candidate = HSLColor(
                hue=(hue0 + step * HUE_STRIDE) % HUE_COUNT,
                saturation=SATURATION,
                lightness=lightness,
            )
            if candidate not in used_colors:
                color_map[noun] = candidate
                used_colors.add(candidate)
                LOGGER.debug("event=assign_color noun=%r color=%s", noun, candidate)
                return candidate

    raise ColorSpaceExhaustedError(
        f"All {len(LIGHTNESS_LADDER) * HUE_COUNT} colors are in use; "
        f"cannot color {noun!r}."
    )


class ColorAssignor:
    """Owns a color assignment map and the set of colors already issued."""

    def __init__(self) -> None:
        self._colors: Dict[str, HSLColor] = {}
        self._used: Set[HSLColor] = set()

    @property
    def colors(self) -> Mapping[str, HSLColor]:
        return dict(self._colors)

    @property
    def used_colors(self) -> Set[HSLColor]:
        return set(self._used)

    def __len__(self) -> int:
        return len(self._colors)

    def __contains__(self, noun: object) -> bool:
        return noun in self._colors

    def color_for(self, noun: str) -> HSLColor:
        return color_for(noun, self._colors, self._used)

    def assign(self, nouns: Iterable[str]) -> Dict[str, HSLColor]:
        """Color every noun in order and return the mapping for those nouns."""

        return {noun: self.color_for(noun) for noun in nouns}

    def reset(self) -> None:
        LOGGER.info("event=reset_colors assigned=%d", len(self._colors))
        self._colors.clear()
        self._used.clear()
