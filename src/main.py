"""Application composition root -- wires backends into one DatabasePort.

- Reads configuration from environment variables
- Dials the durable store and the cache store
- Selects the caching strategy through the cache factory
- Runs setup + health check on startup, close on shutdown

Entry point: python -m src.main
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from src.infra.cache import factory
from src.infra.kv import hashmap, redis, sqlite
from src.ports.database_port import DatabasePort

logger = logging.getLogger(__name__)

BACKENDS = ("hashmap", "sqlite", "redis")


@dataclass
class AppContext:
    """Everything the application shares, passed explicitly to callers."""

    database: DatabasePort
    logger: logging.Logger = field(default=logger)


def dial_backend(name: str, env: Mapping[str, str]) -> DatabasePort:
    """Dial one backend by name using settings from env.

    Raises:
        ValueError: name is not a known backend.
    """
    name = name.strip().lower()
    if name == "hashmap":
        return hashmap.dial(hashmap.HashmapConfig())
    if name == "sqlite":
        return sqlite.dial(
            sqlite.SqliteConfig(
                path=env.get("KV_SQLITE_PATH", "kv.db"),
                table=env.get("KV_SQLITE_TABLE", "kv"),
            ),
        )
    if name == "redis":
        return redis.dial(
            redis.RedisConfig(
                url=env.get("REDIS_URL", "redis://localhost:6379/0"),
                key_prefix=env.get("KV_REDIS_PREFIX", ""),
            ),
        )
    msg = f"Unknown backend {name!r}, expected one of {', '.join(BACKENDS)}"
    raise ValueError(msg)


def build_context(env: Mapping[str, str] | None = None) -> AppContext:
    """Build the application context: dial backends, apply caching strategy.

    This function is the single composition root. KV_CACHE_TYPE is required;
    an unset value raises NoCacheTypeError from the factory.
    """
    env = os.environ if env is None else env

    database = dial_backend(env.get("KV_DATABASE_BACKEND", "sqlite"), env)
    cache = dial_backend(env.get("KV_CACHE_BACKEND", "hashmap"), env)

    db = factory.dial(
        factory.CacheConfig(
            database=database,
            cache=cache,
            cache_type=env.get("KV_CACHE_TYPE"),
        ),
    )
    logger.info(
        "Database assembled: database=%s cache=%s cache_type=%s",
        type(database).__name__,
        type(cache).__name__,
        env.get("KV_CACHE_TYPE"),
    )
    return AppContext(database=db)


async def start(env: Mapping[str, str] | None = None) -> AppContext:
    """Build the context, then set up and health-check the database.

    A failed check closes the dialed handles before the error propagates.
    """
    ctx = build_context(env)
    try:
        await ctx.database.setup()
        await ctx.database.health_check()
    except BaseException:
        await ctx.database.close()
        raise
    ctx.logger.info("Database ready: %d keys", len(await ctx.database.keys()))
    return ctx


async def stop(ctx: AppContext) -> None:
    await ctx.database.close()
    ctx.logger.info("Database closed")


async def _run() -> None:
    ctx = await start()
    await stop(ctx)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(_run())
