"""Unit tests for the highlighting session."""

import json

import pytest

from helpers import span_colors
from noun_highlighter import (
    HighlightSession,
    JsonFileStore,
    MemoryStore,
    SavedItemNotFoundError,
)
from noun_highlighter.session import BIONIC_READING_KEY, DRAFT_TEXT_KEY


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def session(extractor, store, clock):
    return HighlightSession(extractor=extractor, storage=store, clock=clock)


class TestTextChanged:
    def test_example_sentence(self, session):
        result = session.text_changed("The cat sat on the mat. The cat ran.")
        assert result.repeated_nouns == ["cat"]
        assert set(result.colors) == {"cat"}
        assert span_colors(result.html) == {"cat": f"color: {result.colors['cat']};"}

    def test_colors_stable_as_text_grows(self, session):
        first = session.text_changed("The cat sat. The cat ran.").colors["cat"]
        result = session.text_changed("The cat sat. The cat ran. A mat, a mat.")
        assert result.colors["cat"] == first
        assert result.colors["mat"] != first

    def test_no_two_nouns_share_a_color(self, session):
        result = session.text_changed(
            "cat cat dog dog bed bed rice rice water water garden garden city city"
        )
        assert len(set(result.colors.values())) == len(result.colors) == 7

    def test_stale_assignment_is_kept_but_not_rendered(self, session):
        color = session.text_changed("cat and cat").colors["cat"]
        result = session.text_changed("only one cat")
        assert result.repeated_nouns == []
        assert "<span" not in result.html
        assert "cat" in session.assignor
        assert session.text_changed("cat, cat").colors["cat"] == color

    def test_revision_increments(self, session):
        session.text_changed("a")
        assert session.text_changed("b").revision == 2

    def test_draft_is_persisted(self, session, store):
        session.text_changed("dog dog")
        assert store.get(DRAFT_TEXT_KEY) == "dog dog"


class TestRestore:
    def test_restored_draft_is_rendered_at_start(self, extractor):
        store = MemoryStore({DRAFT_TEXT_KEY: "the cat and the cat"})
        session = HighlightSession(extractor=extractor, storage=store)
        assert session.result.text == "the cat and the cat"
        assert session.result.repeated_nouns == ["cat"]
        assert session.result.html.count("<span") == 2

    def test_result_tracks_latest_change(self, session):
        latest = session.text_changed("dog dog")
        assert session.result is latest

    def test_corrupt_state_file_is_replaced_on_write(self, extractor, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("[1, 2]", encoding="utf-8")
        session = HighlightSession(extractor=extractor, storage=JsonFileStore(str(path)))
        assert session.text == ""
        session.text_changed("hello")
        session.text_changed("hello again")
        item = session.save()
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data[DRAFT_TEXT_KEY] == "hello again"
        assert json.loads(data["saved_items"]) == [item.to_dict()]

    def test_restores_draft_and_preference(self, extractor):
        store = MemoryStore({DRAFT_TEXT_KEY: "dog\tdog", BIONIC_READING_KEY: "true"})
        session = HighlightSession(extractor=extractor, storage=store)
        result = session.render()
        assert session.text == "dog\tdog"
        assert result.bionic_reading is True
        assert result.repeated_nouns == ["dog"]
        assert "&nbsp;" in result.html

    def test_storage_failures_degrade(self, extractor, failing_store):
        session = HighlightSession(extractor=extractor, storage=failing_store)
        assert session.text == ""
        assert session.bionic_reading is False
        result = session.text_changed("cat cat")
        assert result.repeated_nouns == ["cat"]
        assert session.toggle_bionic_reading().bionic_reading is True


class TestPreferences:
    def test_toggle_persists_literal_strings(self, session, store):
        assert session.toggle_bionic_reading().bionic_reading is True
        assert store.get(BIONIC_READING_KEY) == "true"
        assert session.toggle_bionic_reading().bionic_reading is False
        assert store.get(BIONIC_READING_KEY) == "false"

    def test_bionic_output(self, session):
        session.text_changed("garden garden")
        result = session.set_bionic_reading(True)
        assert "<b>gar</b>" in result.html


class TestSavedItems:
    def test_save_and_delete(self, session):
        session.text_changed("hello")
        item = session.save()
        assert session.saved_items == [item]
        session.delete(item.date)
        assert session.saved_items == []

    def test_save_empty_text_rejected(self, session):
        with pytest.raises(ValueError):
            session.save()

    def test_load_feeds_pipeline(self, session):
        session.text_changed("the dog and the dog")
        item = session.save()
        session.text_changed("something else")
        result = session.load(item.date)
        assert session.text == "the dog and the dog"
        assert result.repeated_nouns == ["dog"]

    def test_load_unknown(self, session):
        with pytest.raises(SavedItemNotFoundError):
            session.load("never")


def test_reset_colors(session):
    session.text_changed("cat cat")
    session.reset_colors()
    assert len(session.assignor) == 1
    assert session.assignor.used_colors == set(session.assignor.colors.values())
