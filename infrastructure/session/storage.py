"""Durable key-value storage for the login session.

Only the session keeps state across runs (the role and the logged-in
user). The JSON file implementation survives restarts; the in-memory one
is for tests.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from domain.exceptions import StorageError


class KeyValueStorage(ABC):
    """Abstract string key-value storage interface."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get value for ``key``, or None if not stored."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove ``key``. Missing keys are ignored."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""


class InMemoryStorage(KeyValueStorage):
    """Non-durable storage kept in a dict."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._store: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        self._store[key] = value

    def remove(self, key: str) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()


class JSONFileStorage(KeyValueStorage):
    """Storage persisted as a flat JSON object in one file.

    Every write rewrites the whole file.
    """

    def __init__(self, file_path: str | Path) -> None:
        """Initialize storage.

        Args:
            file_path: JSON file; created on first write
        """
        self._path = Path(file_path)

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def clear(self) -> None:
        """Overwrite the file with an empty object, even when unreadable."""
        self._write({})

    def _read(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read session storage: {self._path}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Session storage is not an object: {self._path}")
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: Dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as exc:
            raise StorageError(f"Cannot write session storage: {self._path}") from exc
