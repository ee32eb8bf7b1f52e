"""Mock DatabasePort driver for tests.

Instead of hand-writing a fake for the port, dial this driver with the
functions you want each operation to run. Any function left unset takes
the happy path. Functions may be plain callables or coroutine functions.

Usage::

    def get(key: str) -> bytes:
        if key == "works":
            return b"Yes"
        raise NotFoundError(key)

    db = dial(MockConfig(get_func=get))
    assert await db.get("works") == b"Yes"
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from src.ports.database_port import DatabasePort


@dataclass(frozen=True)
class MockConfig:
    """Per-operation overrides. Unset operations take the happy path."""

    setup_func: Callable[[], Any] | None = None
    health_check_func: Callable[[], Any] | None = None
    get_func: Callable[[str], Any] | None = None
    set_func: Callable[[str, bytes], Any] | None = None
    delete_func: Callable[[str], Any] | None = None
    keys_func: Callable[[], Any] | None = None
    close_func: Callable[[], Any] | None = None


async def _call(func: Callable[..., Any], *args: Any) -> Any:
    result = func(*args)
    if inspect.isawaitable(result):
        return await result
    return result


class MockDatabase(DatabasePort):
    """DatabasePort whose behaviour is supplied by MockConfig functions."""

    def __init__(self, config: MockConfig | None = None) -> None:
        self._config = config or MockConfig()

    async def setup(self) -> None:
        if self._config.setup_func is not None:
            await _call(self._config.setup_func)

    async def health_check(self) -> None:
        if self._config.health_check_func is not None:
            await _call(self._config.health_check_func)

    async def get(self, key: str) -> bytes:
        """Return b"" unless get_func is set."""
        if self._config.get_func is not None:
            return await _call(self._config.get_func, key)  # type: ignore[no-any-return]
        return b""

    async def set(self, key: str, value: bytes) -> None:
        if self._config.set_func is not None:
            await _call(self._config.set_func, key, value)

    async def delete(self, key: str) -> None:
        if self._config.delete_func is not None:
            await _call(self._config.delete_func, key)

    async def keys(self) -> list[str]:
        """Return [] unless keys_func is set."""
        if self._config.keys_func is not None:
            return await _call(self._config.keys_func)  # type: ignore[no-any-return]
        return []

    async def close(self) -> None:
        if self._config.close_func is not None:
            await _call(self._config.close_func)


def dial(config: MockConfig | None = None) -> MockDatabase:
    """Create a mock database handle."""
    return MockDatabase(config)
