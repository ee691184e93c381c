"""Session state and the per-change highlighting pipeline."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Callable, List, Optional

from .colors import ColorAssignor
from .config import DEFAULT_BIONIC_FRACTION, DEFAULT_TAB_WIDTH, HighlighterConfig
from .extractor import NounExtractor
from .models import RenderResult, SavedItem
from .renderer import render
from .repetition import find_repeated_nouns
from .saved import SavedTextStore
from .storage import JsonFileStore, KeyValueStore, MemoryStore


LOGGER = logging.getLogger(__name__)

DRAFT_TEXT_KEY = "draft_text"
BIONIC_READING_KEY = "bionic_reading"


def highlight(
    text: str,
    extractor: NounExtractor,
    assignor: ColorAssignor,
    bionic_reading: bool = False,
    tab_width: int = DEFAULT_TAB_WIDTH,
    bionic_fraction: float = DEFAULT_BIONIC_FRACTION,
) -> RenderResult:
    """Run extraction, counting, coloring and rendering for ``text``.

    Colors are assigned through ``assignor`` and persist there; only the
    nouns repeated in ``text`` are highlighted.
    """

    start = time.perf_counter()
    nouns = extractor.extract_nouns(text)
    repeated = find_repeated_nouns(text, nouns)
    colors = assignor.assign(repeated)
    markup = render(
        text,
        colors,
        bionic_reading=bionic_reading,
        tab_width=tab_width,
        bionic_fraction=bionic_fraction,
    )
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    LOGGER.debug(
        "event=highlight text_len=%d nouns=%d repeated=%d latency_ms=%.2f",
        len(text),
        len(nouns),
        len(repeated),
        elapsed_ms,
    )
    return RenderResult(
        text=text,
        html=markup,
        repeated_nouns=repeated,
        colors={noun: str(color) for noun, color in colors.items()},
        bionic_reading=bionic_reading,
    )


class HighlightSession:
    """Holds draft text, color assignments and preferences for one user.

    The restored draft goes through the pipeline once at construction, so
    ``result`` is render-ready immediately. Every method recomputes
    synchronously from the latest text and returns render-ready output. Storage failures are logged and never propagate;
    in-memory state stays authoritative.
    """

    def __init__(
        self,
        extractor: Optional[NounExtractor] = None,
        storage: Optional[KeyValueStore] = None,
        config: Optional[HighlighterConfig] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._config = config or HighlighterConfig()
        if extractor is None:
            extractor = NounExtractor(
                self._config.model_name,
                noun_pos=self._config.noun_pos,
                include_noun_chunks=self._config.include_noun_chunks,
            )
        if storage is None:
            storage = (
                JsonFileStore(self._config.storage_path)
                if self._config.storage_path
                else MemoryStore()
            )
        self._extractor = extractor
        self._storage = storage
        self._assignor = ColorAssignor()
        self._saved = SavedTextStore(storage, clock=clock)
        self._revision = 0
        self._text = self._read(DRAFT_TEXT_KEY) or ""
        self._bionic_reading = self._read(BIONIC_READING_KEY) == "true"
        LOGGER.info(
            "event=session_start draft_len=%d bionic_reading=%s saved_items=%d",
            len(self._text),
            self._bionic_reading,
            len(self._saved),
        )
        self._result = self.render()

    def _read(self, key: str) -> Optional[str]:
        try:
            return self._storage.get(key)
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception(
                "event=storage_read status=error key=%s error=%s",
                key,
                exc.__class__.__name__,
            )
            return None

    def _write(self, key: str, value: str) -> None:
        try:
            self._storage.set(key, value)
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception(
                "event=storage_write status=error key=%s error=%s",
                key,
                exc.__class__.__name__,
            )

    @property
    def text(self) -> str:
        return self._text

    @property
    def bionic_reading(self) -> bool:
        return self._bionic_reading

    @property
    def result(self) -> RenderResult:
        """Output of the most recent pipeline run."""

        return self._result

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def assignor(self) -> ColorAssignor:
        return self._assignor

    @property
    def saved_items(self) -> List[SavedItem]:
        return self._saved.list()

    def render(self) -> RenderResult:
        result = highlight(
            self._text,
            self._extractor,
            self._assignor,
            bionic_reading=self._bionic_reading,
            tab_width=self._config.tab_width,
            bionic_fraction=self._config.bionic_fraction,
        )
        result.revision = self._revision
        self._result = result
        return result

    def text_changed(self, text: str) -> RenderResult:
        self._text = text
        self._revision += 1
        self._write(DRAFT_TEXT_KEY, text)
        return self.render()

    def set_bionic_reading(self, enabled: bool) -> RenderResult:
        self._bionic_reading = bool(enabled)
        self._write(BIONIC_READING_KEY, "true" if self._bionic_reading else "false")
        return self.render()

    def toggle_bionic_reading(self) -> RenderResult:
        return self.set_bionic_reading(not self._bionic_reading)

    def save(self) -> SavedItem:
        """Save the current text; raises ``ValueError`` when it is empty."""

        return self._saved.save(self._text)

    def delete(self, date: str) -> None:
        self._saved.delete(date)

    def load(self, date: str) -> RenderResult:
        """Make a saved text the current text; raises ``SavedItemNotFoundError``."""

        return self.text_changed(self._saved.load(date))

    def reset_colors(self) -> RenderResult:
        self._assignor.reset()
        return self.render()
