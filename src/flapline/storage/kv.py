"""
Key-value stores used for persisting small pieces of game data.

Stores only deal in strings. Interpreting values is left to the caller.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional
import json
import logging
import os
import threading

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Abstract string key-value store.

    Implementations may raise on I/O failure; callers at the persistence
    boundary are expected to catch and log.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> bool:
        """Store a value. Returns True on success."""
        ...


class MemoryStore(KeyValueStore):
    """In-process store, handy for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> bool:
        with self._lock:
            self._data[key] = value
        return True


class JsonFileStore(KeyValueStore):
    """Persistent store backed by a single JSON object file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self.path}")
        return data

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> bool:
        with self._lock:
            try:
                data = self._read()
            except ValueError as e:
                # JSONDecodeError is a ValueError too
                logger.warning(f"Overwriting unreadable store {self.path}: {e}")
                data = {}
            data[key] = value

            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)

        logger.debug(f"Stored {key!r} in {self.path}")
        return True
