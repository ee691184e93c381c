"""Shared fixtures for the noun_highlighter test suite.

The pipelines built here are blank English spaCy pipelines with lookup
components: one tags a fixed vocabulary as nouns, the other also builds a
rule-based dependency parse so noun chunks are available. The tests never
need a trained model package.
"""

from datetime import datetime, timedelta
from typing import Optional

import pytest
import spacy
from spacy.language import Language
from spacy.tokens import Doc

from noun_highlighter import NounExtractor


LOOKUP_NOUNS = {
    "cat",
    "mat",
    "dog",
    "bowl",
    "bed",
    "garden",
    "water",
    "rice",
    "color",
    "span",
    "city",
}


@Language.component("lookup_noun_tagger")
def lookup_noun_tagger(doc):
    for token in doc:
        token.pos_ = "NOUN" if token.lower_ in LOOKUP_NOUNS else "X"
    return doc


@pytest.fixture(scope="session")
def lookup_nlp():
    nlp = spacy.blank("en")
    nlp.add_pipe("lookup_noun_tagger")
    return nlp


@pytest.fixture
def extractor(lookup_nlp):
    return NounExtractor(lookup_nlp)


LOOKUP_DETERMINERS = {"the", "a", "an", "my"}
LOOKUP_ADJECTIVES = {"black", "red", "big", "old"}
LOOKUP_VERBS = {"saw", "sat", "ran", "chased", "likes"}


def _lookup_pos(word: str) -> str:
    lowered = word.lower()
    if lowered in LOOKUP_NOUNS:
        return "NOUN"
    if lowered in LOOKUP_DETERMINERS:
        return "DET"
    if lowered in LOOKUP_ADJECTIVES:
        return "ADJ"
    if lowered in LOOKUP_VERBS:
        return "VERB"
    return "X"


@Language.component("lookup_rule_parser")
def lookup_rule_parser(doc):
    """Tag and parse a single clause: DET/ADJ attach to the next noun, nouns
    before the first verb are subjects, nouns after it objects."""

    words = [token.text for token in doc]
    pos = [_lookup_pos(word) for word in words]
    root = pos.index("VERB") if "VERB" in pos else 0

    heads, deps = [], []
    for i, tag in enumerate(pos):
        if i == root:
            heads.append(i)
            deps.append("ROOT")
        elif tag in ("DET", "ADJ"):
            noun = next((j for j in range(i + 1, len(pos)) if pos[j] == "NOUN"), root)
            heads.append(noun)
            deps.append("det" if tag == "DET" else "amod")
        elif tag == "NOUN":
            heads.append(root)
            deps.append("nsubj" if i < root else "dobj")
        else:
            heads.append(root)
            deps.append("dep")

    return Doc(
        doc.vocab,
        words=words,
        spaces=[bool(token.whitespace_) for token in doc],
        pos=pos,
        heads=heads,
        deps=deps,
    )


@pytest.fixture(scope="session")
def parsed_nlp():
    nlp = spacy.blank("en")
    nlp.add_pipe("lookup_rule_parser")
    return nlp


@pytest.fixture
def chunk_extractor(parsed_nlp):
    return NounExtractor(parsed_nlp)


class FailingStore:
    """Key-value store whose every operation fails like a broken disk."""

    def get(self, key: str) -> Optional[str]:
        raise OSError("read failed")

    def set(self, key: str, value: str) -> None:
        raise OSError("write failed")

    def delete(self, key: str) -> None:
        raise OSError("delete failed")


@pytest.fixture
def failing_store():
    return FailingStore()


class StepClock:
    """Clock advancing one second per call."""

    def __init__(self, start: Optional[datetime] = None) -> None:
        self.now = start or datetime(2024, 3, 1, 9, 30, 0)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def clock():
    return StepClock()

