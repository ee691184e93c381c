"""Saved-text snapshots persisted as a JSON array in a key-value store."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import jsonschema

from .models import SavedItem
from .storage import KeyValueStore


LOGGER = logging.getLogger(__name__)

SAVED_ITEMS_KEY = "saved_items"
DATE_FORMAT = "%d/%m/%Y, %H:%M:%S"

SAVED_ITEMS_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "text": {"type": "string", "minLength": 1},
            "date": {"type": "string", "minLength": 1},
        },
        "required": ["text", "date"],
    },
}


class SavedItemNotFoundError(KeyError):
    """Raised when no saved item carries the requested date."""


def parse_saved_items(raw: Optional[str]) -> List[SavedItem]:
    """Deserialize and validate a saved-items JSON array.

    Raises
    ------
    ValueError
        If ``raw`` is not valid JSON.
    jsonschema.ValidationError
        If any entry violates the schema; no entry is kept in that case.
    """

    if raw is None or not raw.strip():
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid saved items JSON: {exc.msg}") from exc
    jsonschema.validate(instance=data, schema=SAVED_ITEMS_SCHEMA)
    return [SavedItem(text=entry["text"], date=entry["date"]) for entry in data]


def serialize_saved_items(items: List[SavedItem]) -> str:
    return json.dumps([item.to_dict() for item in items], ensure_ascii=False)


class SavedTextStore:
    """Ordered collection of saved texts, written through to storage."""

    def __init__(
        self,
        storage: KeyValueStore,
        key: str = SAVED_ITEMS_KEY,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock = clock
        self._items: List[SavedItem] = self._load()

    def _load(self) -> List[SavedItem]:
        try:
            raw = self._storage.get(self._key)
            items = parse_saved_items(raw)
        except (ValueError, jsonschema.ValidationError) as exc:
            LOGGER.warning(
                "event=load_saved_items status=invalid key=%s error=%s",
                self._key,
                exc.__class__.__name__,
            )
            return []
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception(
                "event=load_saved_items status=error key=%s error=%s",
                self._key,
                exc.__class__.__name__,
            )
            return []
        LOGGER.info("event=load_saved_items status=finished items=%d", len(items))
        return items

    def _persist(self) -> None:
        # In-memory items stay authoritative when the write fails.
        try:
            self._storage.set(self._key, serialize_saved_items(self._items))
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception(
                "event=persist_saved_items status=error key=%s error=%s",
                self._key,
                exc.__class__.__name__,
            )

    def list(self) -> List[SavedItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def _unique_date(self, date: str) -> str:
        taken = {item.date for item in self._items}
        if date not in taken:
            return date
        n = 2
        while f"{date} ({n})" in taken:
            n += 1
        return f"{date} ({n})"

    def save(self, text: str) -> SavedItem:
        """Append ``text`` stamped with the current time and persist."""

        if not text:
            raise ValueError("Cannot save empty text.")
        date = self._unique_date(self._clock().strftime(DATE_FORMAT))
        item = SavedItem(text=text, date=date)
        self._items.append(item)
        LOGGER.info("event=save_item date=%s text_len=%d", date, len(text))
        self._persist()
        return item

    def delete(self, date: str) -> None:
        """Remove the item saved under ``date``; unknown dates are ignored."""

        remaining = [item for item in self._items if item.date != date]
        if len(remaining) == len(self._items):
            LOGGER.info("event=delete_item status=not_found date=%s", date)
            return
        self._items = remaining
        LOGGER.info("event=delete_item status=finished date=%s", date)
        self._persist()

    def get(self, date: str) -> SavedItem:
        for item in self._items:
            if item.date == date:
                return item
        raise SavedItemNotFoundError(date)

    def load(self, date: str) -> str:
        """Return the text saved under ``date``."""

        return self.get(date).text
