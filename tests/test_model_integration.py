"""End-to-end checks against a trained English pipeline, when installed."""

import pytest
import spacy

from noun_highlighter import ColorAssignor, NounExtractor, highlight

pytestmark = pytest.mark.skipif(
    not spacy.util.is_package("en_core_web_sm"),
    reason="en_core_web_sm is not installed",
)


@pytest.fixture(scope="module")
def model_extractor():
    return NounExtractor("en_core_web_sm")


def test_example_sentence(model_extractor):
    text = "The cat sat on the mat. The cat ran."
    nouns = model_extractor.extract_nouns(text)
    assert {"cat", "mat"} <= nouns

    result = highlight(text, model_extractor, ColorAssignor())
    assert "cat" in result.repeated_nouns
    assert "mat" not in result.repeated_nouns
    assert result.html.count("<span") == 2


def test_unusual_nouns_do_not_break_matching(model_extractor):
    text = "My dog's toy (the red one) and my dog's bed. C++ fans love C++."
    result = highlight(text, model_extractor, ColorAssignor())
    assert "<script" not in result.html
    assert len(set(result.colors.values())) == len(result.colors)
