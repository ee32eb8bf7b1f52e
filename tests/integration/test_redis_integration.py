"""Integration test for the Redis adapter and the look-aside composite.

Connects to live Redis on REDIS_URL (default port 6380, DB 15).
Uses a test prefix to avoid data conflicts; skipped when Redis is down.
"""

from __future__ import annotations

import os
import socket
from typing import TYPE_CHECKING
from urllib.parse import urlparse

import pytest

from src.infra.cache.factory import CacheConfig, CacheType, dial
from src.infra.kv import sqlite
from src.infra.kv.redis import RedisConfig, RedisDatabase
from src.shared.errors import NotFoundError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

REDIS_URL = os.environ.get("REDIS_URL", "redis://localhost:6380/15")
PREFIX = "inttest:"


def _can_connect() -> bool:
    """Check if Redis is reachable."""
    parsed = urlparse(REDIS_URL)
    try:
        address = (parsed.hostname or "localhost", parsed.port or 6379)
        s = socket.create_connection(address, timeout=1)
        s.close()
        return True
    except (OSError, ValueError):
        return False


skip_no_redis = pytest.mark.skipif(
    not _can_connect(),
    reason="Redis not available",
)


@pytest.fixture()
async def redis_live() -> AsyncGenerator[RedisDatabase, None]:
    db = RedisDatabase(RedisConfig(url=REDIS_URL, key_prefix=PREFIX))
    await db.setup()
    yield db
    for key in await db.keys():
        await db.delete(key)
    await db.close()


@pytest.mark.integration
@skip_no_redis
class TestRedisIntegration:
    """Integration: RedisDatabase against live Redis."""

    async def test_health_check(self, redis_live: RedisDatabase) -> None:
        await redis_live.health_check()

    async def test_set_and_get(self, redis_live: RedisDatabase) -> None:
        await redis_live.set("k1", b"hello")
        assert await redis_live.get("k1") == b"hello"

    async def test_delete(self, redis_live: RedisDatabase) -> None:
        await redis_live.set("k2", b"bye")
        await redis_live.delete("k2")
        with pytest.raises(NotFoundError):
            await redis_live.get("k2")

    async def test_keys(self, redis_live: RedisDatabase) -> None:
        await redis_live.set("a", b"1")
        await redis_live.set("b", b"2")
        assert {"a", "b"} <= set(await redis_live.keys())


@pytest.mark.integration
@skip_no_redis
class TestLookasideIntegration:
    """Integration: SQLite durable store behind a live Redis cache."""

    async def test_read_through_refills_redis(
        self,
        redis_live: RedisDatabase,
        sqlite_path: str,
    ) -> None:
        durable = sqlite.dial(sqlite.SqliteConfig(path=sqlite_path))
        db = dial(CacheConfig(database=durable, cache=redis_live, cache_type=CacheType.LOOKASIDE))
        await db.setup()
        try:
            await durable.set("refill", b"from-sqlite")
            assert await db.get("refill") == b"from-sqlite"
            assert await redis_live.get("refill") == b"from-sqlite"
        finally:
            await durable.close()
