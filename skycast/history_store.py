# ABOUTME: JSON persistence of search history over a simple key-value store.
# ABOUTME: Ships an in-memory store and a single-file JSON store; I/O failures surface as StorageError.

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from skycast.errors import StorageDecodingError, StorageEncodingError, StorageReadError, StorageWriteError
from skycast.models import MAX_HISTORY_ENTRIES, HistoryEntry
from skycast.ports import KeyValueStore

logger = logging.getLogger(__name__)

SEARCH_HISTORY_KEY = "search_history_key"

_entries_adapter = TypeAdapter(list[HistoryEntry])


class InMemoryKeyValueStore:
    """Dict-backed store; contents last as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore:
    """Keeps every key in one JSON object on disk.

    Writes go to a temp file in the same directory and are moved into place with os.replace,
    so a crash mid-write leaves the previous file intact.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def _read(self) -> dict[str, str]:
        try:
            raw = self.path.read_bytes()
        except (FileNotFoundError, NotADirectoryError):
            return {}
        except OSError as e:
            raise StorageReadError() from e

        try:
            data = json.loads(raw)
        except ValueError as e:
            # covers both malformed JSON and bytes that are not valid text
            raise StorageDecodingError() from e
        if not isinstance(data, dict):
            raise StorageDecodingError()
        return data

    def _write(self, data: dict[str, str]) -> None:
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)
            raise StorageWriteError() from e


class JsonHistoryStore:
    """HistoryStore that serializes entries as JSON under SEARCH_HISTORY_KEY."""

    def __init__(self, store: KeyValueStore, key: str = SEARCH_HISTORY_KEY):
        self.store = store
        self.key = key

    def save(self, entries: list[HistoryEntry]) -> None:
        to_save = list(entries[:MAX_HISTORY_ENTRIES])
        try:
            payload = _entries_adapter.dump_json(to_save).decode("utf-8")
        except (ValueError, TypeError) as e:
            raise StorageEncodingError() from e
        self.store.set(self.key, payload)
        logger.debug("Saved %d history entries", len(to_save))

    def load(self) -> list[HistoryEntry]:
        payload = self.store.get(self.key)
        if payload is None:
            return []
        try:
            return _entries_adapter.validate_json(payload)
        except ValidationError as e:
            raise StorageDecodingError() from e

    def clear(self) -> None:
        self.store.delete(self.key)
