"""Durable key-value storage used for preferences, drafts and saved items."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Dict, Optional, Protocol, Tuple


LOGGER = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """String-to-string storage contract."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryStore:
    """In-process store; contents live as long as the object."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data


class JsonFileStore:
    """Store backed by a single JSON object file.

    A missing file reads as empty. Writes replace the file atomically. Reads
    of a corrupt file raise ``ValueError``; writes discard the corrupt content
    and start from an empty object. Other I/O errors propagate.
    """

    def __init__(self, path: str) -> None:
        self._path = os.fspath(path)

    @property
    def path(self) -> str:
        return self._path

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self._path):
            return {}
        with open(self._path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Top-level JSON must be an object: {self._path}")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self._path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        LOGGER.debug("event=store_write file=%s keys=%d", self._path, len(data))

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def _read_for_write(self) -> Tuple[Dict[str, str], bool]:
        try:
            return self._read(), False
        except ValueError as exc:
            LOGGER.warning(
                "event=store_read status=corrupt file=%s error=%s action=reset",
                self._path,
                exc.__class__.__name__,
            )
            return {}, True

    def set(self, key: str, value: str) -> None:
        data, _ = self._read_for_write()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data, corrupt = self._read_for_write()
        if data.pop(key, None) is not None or corrupt:
            self._write(data)
