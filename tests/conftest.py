"""Root conftest - shared fixtures for all test layers.

Markers:
    @pytest.mark.unit        - No external deps
    @pytest.mark.integration - Needs running services
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from src.infra.kv.redis import RedisConfig, RedisDatabase
from tests.fakes import FakeRedis

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture()
def redis_db(fake_redis: FakeRedis) -> RedisDatabase:
    """RedisDatabase wired to an in-memory FakeRedis."""
    return RedisDatabase(RedisConfig(), client=fake_redis)  # type: ignore[arg-type]


@pytest.fixture()
def sqlite_path(tmp_path: Path) -> str:
    return str(tmp_path / "kv.db")
