"""Whole-word, case-insensitive repetition counting for nouns."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Dict, Iterable, List, Pattern

# Whole-word guards. Unlike ``\b`` they also hold for nouns that start or end
# with a non-word character ("U.S.", "rock'n'roll").
_WORD_START = r"(?<!\w)"
_WORD_END = r"(?!\w)"


def word_pattern_source(noun: str) -> str:
    """Return the uncompiled whole-word pattern for ``noun``."""

    return f"{_WORD_START}{re.escape(noun)}{_WORD_END}"


@lru_cache(maxsize=4096)
def noun_pattern(noun: str) -> Pattern[str]:
    """Compile a whole-word, case-insensitive pattern matching ``noun``."""

    return re.compile(word_pattern_source(noun), re.IGNORECASE)


def count_occurrences(text: str, noun: str) -> int:
    """Count whole-word, case-insensitive occurrences of ``noun`` in ``text``."""

    if not noun:
        return 0
    return sum(1 for _ in noun_pattern(noun).finditer(text))


def count_nouns(text: str, nouns: Iterable[str]) -> Dict[str, int]:
    """Count every noun of ``nouns`` in ``text``."""

    return {noun: count_occurrences(text, noun) for noun in set(nouns) if noun}


def find_repeated_nouns(text: str, nouns: Iterable[str]) -> List[str]:
    """Return the nouns occurring more than once in ``text``.

    The result is ordered by first occurrence in the text, ties broken by the
    noun string, so callers get a stable order for a given input.
    """

    first_seen: Dict[str, int] = {}
    for noun in set(nouns):
        if not noun:
            continue
        matches = noun_pattern(noun).finditer(text)
        first = next(matches, None)
        if first is None or next(matches, None) is None:
            continue
        first_seen[noun] = first.start()

    return sorted(first_seen, key=lambda n: (first_seen[n], n))
