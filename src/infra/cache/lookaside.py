"""Look-aside cache composite implementing DatabasePort.

Wraps two DatabasePort handles: ``database`` (source of truth) and
``cache`` (fast, possibly lossy). Reads check the cache first and fall back
to the database on a miss, refilling the cache afterwards. Writes go to the
database first and to the cache only once the database write succeeded.

Error priority: when both sides fail in one call, the database error is
raised. Cache-side failures that happen after the database side already
succeeded are raised as CacheError, chained from the underlying exception.

No locking, no timeouts, no retries: each call performs at most two
sequential calls into the inner handles. Concurrency safety and deadlines
belong to the inner handles. Closing an inner handle through the
``database``/``cache`` accessors while a call is in flight has whatever
effect that handle's own close() has.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.ports.database_port import DatabasePort
from src.shared.errors import (
    CacheError,
    InvalidCacheError,
    InvalidDatabaseError,
    NotFoundError,
)
from src.shared.logging.handle_failure import log_handle_failure

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from src.shared.logging.handle_failure import Side

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookasideConfig:
    """Inner handles for the look-aside composite. Both are required."""

    database: DatabasePort | None = None
    cache: DatabasePort | None = None


class Lookaside(DatabasePort):
    """Read-through, write-through cache over two DatabasePort handles."""

    def __init__(self, database: DatabasePort | None, cache: DatabasePort | None) -> None:
        if database is None:
            raise InvalidDatabaseError
        if cache is None:
            raise InvalidCacheError
        self._data = database
        self._cache = cache

    @property
    def database(self) -> DatabasePort:
        """The wrapped source-of-truth handle."""
        return self._data

    @property
    def cache(self) -> DatabasePort:
        """The wrapped cache handle."""
        return self._cache

    async def setup(self) -> None:
        """Set up the database, then the cache. A database failure skips the cache."""
        await self._data.setup()
        await self._cache.setup()

    async def health_check(self) -> None:
        """Check both sides; the database's failure takes priority."""
        data_exc = await _capture(self._data.health_check())
        cache_exc = await _capture(self._cache.health_check())
        _raise_first(data_exc, cache_exc)

    async def get(self, key: str) -> bytes:
        """Return the cached value, or read through to the database on a miss.

        Raises:
            NotFoundError: the key is absent from the database.
            CacheError: the value was fetched from the database but could
                not be written to the cache; ``value`` carries it.
        """
        try:
            return await self._cache.get(key)
        except NotFoundError:
            logger.debug("Cache miss for key %r, reading through to database", key)

        value = await self._data.get(key)

        try:
            await self._cache.set(key, value)
        except Exception as exc:
            raise _cache_error(exc, "get", key, value=value) from exc

        return value

    async def set(self, key: str, value: bytes) -> None:
        """Write to the database, then to the cache.

        Raises:
            CacheError: the database write committed but the cache write
                failed. Not rolled back; the next miss refills the cache.
        """
        await self._data.set(key, value)

        try:
            await self._cache.set(key, value)
        except Exception as exc:
            raise _cache_error(exc, "set", key) from exc

    async def delete(self, key: str) -> None:
        """Delete from both sides; the database's failure takes priority."""
        data_exc = await _capture(self._data.delete(key))
        cache_exc = await _capture(self._cache.delete(key))
        _raise_first(data_exc, cache_exc)

    async def keys(self) -> list[str]:
        """List keys from the database only; the cache may hold a subset."""
        return await self._data.keys()

    async def cache_keys(self) -> list[str]:
        """List the keys currently held by the cache."""
        return await self._cache.keys()

    async def close(self) -> None:
        """Close both inner handles. Failures are logged, never raised."""
        sides: tuple[tuple[Side, DatabasePort], ...] = (
            ("database", self._data),
            ("cache", self._cache),
        )
        for side, handle in sides:
            exc = await _capture(handle.close())
            if exc is not None:
                log_handle_failure(logger, exc, operation="close", side=side)


def _cache_error(
    exc: Exception,
    operation: str,
    key: str,
    value: bytes | None = None,
) -> CacheError:
    error = CacheError(exc, value=value)
    error.__cause__ = exc
    log_handle_failure(logger, error, operation=operation, key=key)
    return error


async def _capture(awaitable: Awaitable[None]) -> Exception | None:
    try:
        await awaitable
    except Exception as exc:
        return exc
    return None


def _raise_first(*errors: Exception | None) -> None:
    for exc in errors:
        if exc is not None:
            raise exc


def dial(config: LookasideConfig) -> Lookaside:
    """Create a look-aside composite from config.

    Raises:
        InvalidDatabaseError: config.database is None.
        InvalidCacheError: config.cache is None.
    """
    return Lookaside(config.database, config.cache)
