"""A small persistent string key-value store in the spirit of browser local storage."""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path


class LocalStorage:
    """String keys mapped to string values, kept in memory and optionally in a JSON file.

    Keys keep the order in which they were first stored.
    """

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._lock = threading.Lock()
        self._items: dict[str, str] = {}
        if self._path is not None and self._path.exists():
            self._items = self._load(self._path)

    @staticmethod
    def _load(path: Path) -> dict[str, str]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"storage file {path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict) or not all(
            isinstance(key, str) and isinstance(value, str) for key, value in data.items()
        ):
            raise ValueError(f"storage file {path} must hold an object of strings")
        return data

    def _flush(self) -> None:
        if self._path is None:
            return
        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(dir=directory, prefix=".storage-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self._items, handle, ensure_ascii=False)
            os.replace(temp_name, self._path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None."""
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any earlier value."""
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError("keys and values must be strings")
        with self._lock:
            self._items[key] = value
            self._flush()

    def remove_item(self, key: str) -> None:
        """Forget ``key``; a missing key is ignored."""
        with self._lock:
            if self._items.pop(key, None) is not None:
                self._flush()

    def keys(self) -> list[str]:
        """Return the stored keys in insertion order."""
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)