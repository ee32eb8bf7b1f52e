"""In-process hashmap implementation of DatabasePort.

- Data lives in a plain dict for the lifetime of the handle
- Non-persistent: close() drops every value
- Safe for concurrent use from several threads and tasks
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

from src.ports.database_port import DatabasePort
from src.shared.errors import NoConnectionError, NotFoundError
from src.shared.validation import valid_data, valid_key


@dataclass(frozen=True)
class HashmapConfig:
    """The hashmap driver takes no options."""


class HashmapDatabase(DatabasePort):
    """Dict-backed adapter implementing the DatabasePort interface."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._data: dict[str, bytes] | None = {}

    def _store(self) -> dict[str, bytes]:
        if self._data is None:
            raise NoConnectionError
        return self._data

    async def setup(self) -> None:
        """Nothing to prepare for an in-process map."""
        with self._lock:
            self._store()

    async def health_check(self) -> None:
        with self._lock:
            self._store()

    async def get(self, key: str) -> bytes:
        valid_key(key)
        with self._lock:
            try:
                return self._store()[key]
            except KeyError:
                raise NotFoundError(key) from None

    async def set(self, key: str, value: bytes) -> None:
        valid_key(key)
        valid_data(value)
        with self._lock:
            self._store()[key] = bytes(value)

    async def delete(self, key: str) -> None:
        valid_key(key)
        with self._lock:
            self._store().pop(key, None)

    async def keys(self) -> list[str]:
        with self._lock:
            return list(self._store())

    async def close(self) -> None:
        """Drop all stored data; later operations raise NoConnectionError."""
        with self._lock:
            self._data = None


def dial(config: HashmapConfig | None = None) -> HashmapDatabase:  # noqa: ARG001
    """Create a new, empty hashmap database."""
    return HashmapDatabase()
