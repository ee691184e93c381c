"""Runtime configuration for the noun highlighter."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple


ENV_PREFIX = "NOUN_HIGHLIGHTER_"

DEFAULT_MODEL = "en_core_web_sm"
DEFAULT_NOUN_POS: Tuple[str, ...] = ("NOUN", "PROPN")
DEFAULT_TAB_WIDTH = 4
DEFAULT_BIONIC_FRACTION = 0.5

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class HighlighterConfig:
    """Settings shared by the extractor, renderer and session.

    Attributes
    ----------
    model_name:
        Name of the spaCy pipeline package to load.
    noun_pos:
        Coarse POS tags treated as nouns.
    include_noun_chunks:
        Also collect multi-word noun phrases when the pipeline has a parser.
    tab_width:
        Number of non-breaking spaces a tab renders as.
    bionic_fraction:
        Share of each word emphasized in bionic reading mode.
    storage_path:
        JSON file used for persistence. ``None`` keeps everything in memory.
    """

    model_name: str = DEFAULT_MODEL
    noun_pos: Tuple[str, ...] = DEFAULT_NOUN_POS
    include_noun_chunks: bool = True
    tab_width: int = DEFAULT_TAB_WIDTH
    bionic_fraction: float = DEFAULT_BIONIC_FRACTION
    storage_path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.tab_width < 0:
            raise ValueError("tab_width must be >= 0.")
        if not 0.0 < self.bionic_fraction <= 1.0:
            raise ValueError("bionic_fraction must be in (0, 1].")
        if not self.noun_pos:
            raise ValueError("noun_pos must name at least one POS tag.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HighlighterConfig":
        """Build a config from ``NOUN_HIGHLIGHTER_*`` environment variables."""

        env = os.environ if environ is None else environ

        def _get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name)
            if value is None or not value.strip():
                return None
            return value.strip()

        kwargs = {}
        model = _get("MODEL")
        if model is not None:
            kwargs["model_name"] = model

        tab_width = _get("TAB_WIDTH")
        if tab_width is not None:
            try:
                kwargs["tab_width"] = int(tab_width)
            except ValueError as exc:
                raise ValueError(
                    f"{ENV_PREFIX}TAB_WIDTH must be an integer, got {tab_width!r}."
                ) from exc

        fraction = _get("BIONIC_FRACTION")
        if fraction is not None:
            try:
                kwargs["bionic_fraction"] = float(fraction)
            except ValueError as exc:
                raise ValueError(
                    f"{ENV_PREFIX}BIONIC_FRACTION must be a number, got {fraction!r}."
                ) from exc

        chunks = _get("NOUN_CHUNKS")
        if chunks is not None:
            lowered = chunks.lower()
            if lowered in _TRUE_VALUES:
                kwargs["include_noun_chunks"] = True
            elif lowered in _FALSE_VALUES:
                kwargs["include_noun_chunks"] = False
            else:
                raise ValueError(
                    f"{ENV_PREFIX}NOUN_CHUNKS must be a boolean, got {chunks!r}."
                )

        storage_path = _get("STORAGE_PATH")
        if storage_path is not None:
            kwargs["storage_path"] = storage_path

        return cls(**kwargs)
