"""DatabasePort - Uniform key-value database interface.

Every backend adapter and every composite driver implements this port, so
callers can swap stores (in-process map, Redis, SQLite, a cache composite)
without changing call sites. The contract is intentionally minimal: no
transactions, no range scans, no batch operations.

Lifecycle: dial -> setup -> ready -> close. After close every operation
raises NoConnectionError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class DatabasePort(ABC):
    """Port: Key-value database access."""

    @abstractmethod
    async def setup(self) -> None:
        """Prepare the underlying storage (schema, table, bucket).

        Idempotent; safe to call after every dial.
        """

    @abstractmethod
    async def health_check(self) -> None:
        """Confirm the backend is reachable and serving.

        Raises:
            Exception: Any error means the backend is untrustworthy.
        """

    @abstractmethod
    async def get(self, key: str) -> bytes:
        """Fetch the value stored under key.

        Args:
            key: Non-empty key.

        Returns:
            Stored value bytes.

        Raises:
            InvalidKeyError: key is empty.
            NotFoundError: key is absent.
        """

    @abstractmethod
    async def set(self, key: str, value: bytes) -> None:
        """Insert or overwrite the value stored under key.

        Args:
            key: Non-empty key.
            value: Non-empty value bytes.

        Raises:
            InvalidKeyError: key is empty.
            InvalidDataError: value is empty.
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove key and its value. Deleting an absent key is not an error.

        Raises:
            InvalidKeyError: key is empty.
        """

    @abstractmethod
    async def keys(self) -> list[str]:
        """Return every key in the database, in no particular order.

        This can be expensive; do not assume O(1).
        """

    @abstractmethod
    async def close(self) -> None:
        """Release resources. Best-effort; never raises."""
