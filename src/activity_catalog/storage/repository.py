"""JSON-file storage for data that must survive between sessions."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


class JsonKeyValueStore:
    """Persists string values under string keys in a single JSON document.

    Values are stored verbatim, so callers encode structured data themselves,
    the same way browser local storage is used.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)

    def _read_all(self) -> dict[str, str]:
        if not self._file_path.exists():
            return {}

        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable storage file %s", self._file_path)
            return {}

        if not isinstance(payload, dict):
            logger.warning("Ignoring storage file %s with unexpected layout", self._file_path)
            return {}
        return {str(key): value for key, value in payload.items() if isinstance(value, str)}

    def _write_all(self, values: dict[str, str]) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(values, indent=2), encoding="utf-8")
        tmp_path.replace(self._file_path)

    def get_item(self, key: str) -> str | None:
        """Return the raw value stored under ``key`` or ``None``."""

        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        values = self._read_all()
        values[key] = value
        self._write_all(values)


class FavoritesRepository:
    """Reads and writes the favorites list under a fixed storage key."""

    def __init__(self, store: JsonKeyValueStore, key: str) -> None:
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[int]:
        """Load stored favorite ids.

        A missing entry, invalid JSON or anything other than a list of integer
        ids yields an empty list; the corrupt value is left for the next write
        to overwrite.
        """

        raw_value = self._store.get_item(self._key)
        if raw_value is None:
            return []

        try:
            decoded = json.loads(raw_value)
        except ValueError:
            logger.warning("Discarding unparseable favorites under %r", self._key)
            return []

        if not isinstance(decoded, list) or not all(
            isinstance(item_id, int) and not isinstance(item_id, bool) for item_id in decoded
        ):
            logger.warning("Discarding malformed favorites under %r", self._key)
            return []

        return list(dict.fromkeys(decoded))

    def save(self, item_ids: Iterable[int]) -> None:
        """Write ``item_ids`` as an ordered JSON list."""

        self._store.set_item(self._key, json.dumps(list(item_ids)))
