"""Redis implementation of DatabasePort.

- Values stored as raw bytes (no serialization layer)
- Optional key prefix so several databases can share one Redis DB
- Non-persistent cache (losable; rebuilding acceptable)
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import redis.asyncio as aioredis

from src.ports.database_port import DatabasePort
from src.shared.errors import NoConnectionError, NotFoundError
from src.shared.validation import valid_data, valid_key


@dataclass(frozen=True)
class RedisConfig:
    """Connection options for the Redis driver."""

    url: str = "redis://localhost:6379/0"
    key_prefix: str = ""


_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def _escape_glob(text: str) -> str:
    """Escape Redis glob metacharacters so text matches only itself."""
    return _GLOB_SPECIAL.sub(r"\\\1", text)


class RedisDatabase(DatabasePort):
    """Redis adapter implementing the DatabasePort interface.

    The client connects lazily on first command, so dialing never blocks.
    An already-built client may be passed in; it is then owned and closed
    by this handle.
    """

    def __init__(self, config: RedisConfig, client: aioredis.Redis | None = None) -> None:
        self._prefix = config.key_prefix
        if client is None:
            client = aioredis.from_url(  # type: ignore[no-untyped-call]
                config.url,
                decode_responses=False,
            )
        self._client: aioredis.Redis | None = client

    def _get_client(self) -> aioredis.Redis:
        if self._client is None:
            raise NoConnectionError
        return self._client

    def _full_key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def setup(self) -> None:
        """Redis needs no schema; only verifies the handle is open."""
        self._get_client()

    async def health_check(self) -> None:
        client = self._get_client()
        await client.ping()

    async def get(self, key: str) -> bytes:
        """Retrieve a value by key, raising NotFoundError if absent or expired."""
        valid_key(key)
        client = self._get_client()
        raw = await client.get(self._full_key(key))
        if raw is None:
            raise NotFoundError(key)
        return bytes(raw)

    async def set(self, key: str, value: bytes) -> None:
        valid_key(key)
        valid_data(value)
        client = self._get_client()
        await client.set(self._full_key(key), value)

    async def delete(self, key: str) -> None:
        """Delete a value by key (no-op if absent)."""
        valid_key(key)
        client = self._get_client()
        await client.delete(self._full_key(key))

    async def keys(self) -> list[str]:
        """List every key under the configured prefix, with the prefix stripped."""
        client = self._get_client()
        keys: list[str] = []
        async for raw in client.scan_iter(match=f"{_escape_glob(self._prefix)}*"):
            key = raw.decode("utf-8") if isinstance(raw, bytes) else raw
            if key.startswith(self._prefix):
                keys.append(key[len(self._prefix) :])
        return keys

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._client is not None:
            client, self._client = self._client, None
            await client.aclose()


def dial(config: RedisConfig | None = None) -> RedisDatabase:
    """Create a Redis database handle from config."""
    return RedisDatabase(config or RedisConfig())
