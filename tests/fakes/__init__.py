"""Shared Fake adapters for testing without unittest.mock.

All Fake implementations are real Python classes with in-memory state,
no AsyncMock/MagicMock.
"""

from tests.fakes.redis import FakeRedis

__all__ = [
    "FakeRedis",
]
