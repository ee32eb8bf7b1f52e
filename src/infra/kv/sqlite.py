"""Embedded SQLite implementation of DatabasePort.

Stores every key in a single two-column table inside one database file,
accessed through SQLAlchemy's asyncio engine and the aiosqlite driver.

Provides:
- create_kv_engine(): AsyncEngine factory for a SQLite file
- build_kv_table(): Table definition for a named key-value table
- SqliteDatabase: the DatabasePort adapter

setup() creates the table if it does not exist; until then reads and
writes fail with SQLAlchemy's OperationalError.
"""

from __future__ import annotations

from dataclasses import dataclass

import sqlalchemy as sa
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.ports.database_port import DatabasePort
from src.shared.errors import NoConnectionError, NotFoundError
from src.shared.validation import valid_data, valid_key


@dataclass(frozen=True)
class SqliteConfig:
    """Location of the database file and the table holding the keys."""

    path: str = "kv.db"
    table: str = "kv"


def create_kv_engine(path: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async SQLAlchemy engine for a SQLite file.

    Args:
        path: Filesystem path of the database file.
        echo: Whether to log SQL statements.

    Returns:
        Configured AsyncEngine instance.
    """
    return create_async_engine(f"sqlite+aiosqlite:///{path}", echo=echo)


def build_kv_table(name: str) -> sa.Table:
    """Define the key-value table under its own MetaData."""
    return sa.Table(
        name,
        sa.MetaData(),
        sa.Column("key", sa.Text, primary_key=True),
        sa.Column("value", sa.LargeBinary, nullable=False),
    )


class SqliteDatabase(DatabasePort):
    """SQLite adapter implementing the DatabasePort interface."""

    def __init__(self, config: SqliteConfig) -> None:
        self._engine: AsyncEngine | None = create_kv_engine(config.path)
        self._table = build_kv_table(config.table)

    def _get_engine(self) -> AsyncEngine:
        if self._engine is None:
            raise NoConnectionError
        return self._engine

    async def setup(self) -> None:
        """Create the key-value table if it does not already exist."""
        engine = self._get_engine()
        async with engine.begin() as conn:
            await conn.run_sync(self._table.metadata.create_all, checkfirst=True)

    async def health_check(self) -> None:
        engine = self._get_engine()
        async with engine.connect() as conn:
            await conn.execute(sa.text("SELECT 1"))

    async def get(self, key: str) -> bytes:
        valid_key(key)
        engine = self._get_engine()
        stmt = sa.select(self._table.c["value"]).where(self._table.c["key"] == key)
        async with engine.connect() as conn:
            result = await conn.execute(stmt)
            value = result.scalar_one_or_none()
        if value is None:
            raise NotFoundError(key)
        return bytes(value)

    async def set(self, key: str, value: bytes) -> None:
        """Upsert: an existing value is overwritten."""
        valid_key(key)
        valid_data(value)
        engine = self._get_engine()
        stmt = sqlite_insert(self._table).values(key=key, value=value)
        stmt = stmt.on_conflict_do_update(
            index_elements=[self._table.c["key"]],
            set_={"value": stmt.excluded["value"]},
        )
        async with engine.begin() as conn:
            await conn.execute(stmt)

    async def delete(self, key: str) -> None:
        valid_key(key)
        engine = self._get_engine()
        async with engine.begin() as conn:
            await conn.execute(sa.delete(self._table).where(self._table.c["key"] == key))

    async def keys(self) -> list[str]:
        engine = self._get_engine()
        async with engine.connect() as conn:
            result = await conn.execute(sa.select(self._table.c["key"]))
            return list(result.scalars().all())

    async def close(self) -> None:
        """Dispose the engine's connection pool."""
        if self._engine is not None:
            engine, self._engine = self._engine, None
            await engine.dispose()


def dial(config: SqliteConfig | None = None) -> SqliteDatabase:
    """Create a SQLite database handle; the file is opened on first use."""
    return SqliteDatabase(config or SqliteConfig())
