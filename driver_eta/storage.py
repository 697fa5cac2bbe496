"""Key-value persistence contract and an in-memory JSON implementation."""

from __future__ import annotations

import json
import logging
import threading
from typing import Any, Dict, List, Optional, Protocol

from .errors import StorageError
from .utils import json_dumps

LOGGER = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def put(self, key: str, value: Any) -> None:
        ...

    def get(self, key: str) -> Optional[Any]:
        ...

    def remove(self, key: str) -> None:
        ...

    def clear_all(self) -> None:
        ...

    def keys(self) -> List[str]:
        ...


class MemoryKeyValueStore:
    """Stores JSON text per key, like a device key-value store would.

    Values go through a JSON round trip, so readers never share mutable
    objects with writers. Entries that no longer parse are dropped on read.
    """

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def put(self, key: str, value: Any) -> None:
        try:
            text = json_dumps(value)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Value for key {key!r} is not JSON serialisable") from exc
        with self._lock:
            self._data[key] = text

    def put_raw(self, key: str, text: str) -> None:
        """Store pre-encoded text as-is (imports and tests)."""

        with self._lock:
            self._data[key] = text

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            text = self._data.get(key)
        if text is None:
            return None
        try:
            return json.loads(text)
        except ValueError:
            LOGGER.warning("Removing corrupted data for key %s", key)
            self.remove(key)
            return None

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def clear_all(self) -> None:
        with self._lock:
            self._data.clear()

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._data)


__all__ = ["KeyValueStore", "MemoryKeyValueStore"]
