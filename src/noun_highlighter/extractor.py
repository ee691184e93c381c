"""Noun extraction on top of a lazily loaded spaCy pipeline."""

from __future__ import annotations

import logging
import time
from typing import Iterable, Optional, Set, Union

import spacy
from spacy.language import Language
from spacy.tokens import Doc, Span

from .config import DEFAULT_MODEL, DEFAULT_NOUN_POS


LOGGER = logging.getLogger(__name__)

# Leading tokens stripped from noun chunks ("the cat" -> "cat").
_CHUNK_PREFIX_POS = {"DET", "PRON", "PUNCT", "SPACE"}


class NounExtractor:
    """Noun extractor with lazy-loaded spaCy pipeline.

    Either a model name or an already built ``Language`` can be given. The
    model is loaded on first use only, so constructing an extractor is cheap.
    """

    def __init__(
        self,
        model: Union[str, Language] = DEFAULT_MODEL,
        noun_pos: Iterable[str] = DEFAULT_NOUN_POS,
        include_noun_chunks: bool = True,
    ) -> None:
        if isinstance(model, Language):
            self._model_name = model.meta.get("name", "custom")
            self._nlp: Optional[Language] = model
        else:
            self._model_name = model
            self._nlp = None
        self._noun_pos = frozenset(noun_pos)
        self._include_noun_chunks = include_noun_chunks

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def nlp(self) -> Language:
        """Return a lazy-loaded spaCy pipeline instance."""

        if self._nlp is None:
            start = time.perf_counter()
            LOGGER.info("event=load_model status=starting model=%s", self._model_name)
            try:
                self._nlp = spacy.load(self._model_name)
            except Exception as exc:  # noqa: BLE001
                LOGGER.exception(
                    "event=load_model status=error model=%s error=%s",
                    self._model_name,
                    exc.__class__.__name__,
                )
                raise
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000.0
                LOGGER.info(
                    "event=load_model status=finished model=%s latency_ms=%.2f",
                    self._model_name,
                    elapsed_ms,
                )
        return self._nlp

    def extract_nouns(self, text: str) -> Set[str]:
        """Return the distinct surface strings tagged as nouns in ``text``."""

        if not text or not text.strip():
            return set()

        start = time.perf_counter()
        doc: Doc = self.nlp(text)

        nouns: Set[str] = set()
        for token in doc:
            if token.pos_ in self._noun_pos and token.text.strip():
                nouns.add(token.text)

        if self._include_noun_chunks and doc.has_annotation("DEP"):
            for chunk in doc.noun_chunks:
                phrase = self._chunk_phrase(chunk)
                if phrase:
                    nouns.add(phrase)

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        LOGGER.debug(
            "event=extract_nouns text_len=%d nouns=%d latency_ms=%.2f",
            len(text),
            len(nouns),
            elapsed_ms,
        )
        return nouns

    __call__ = extract_nouns

    @staticmethod
    def _chunk_phrase(chunk: Span) -> Optional[str]:
        """Strip leading determiners from a chunk; keep multi-token phrases only."""

        start = chunk.start
        while start < chunk.end and chunk.doc[start].pos_ in _CHUNK_PREFIX_POS:
            start += 1
        if chunk.end - start < 2:
            return None
        phrase = chunk.doc[start : chunk.end].text.strip()
        return phrase or None
