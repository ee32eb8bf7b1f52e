"""Fake redis.asyncio client for testing without a Redis server.

Covers the commands RedisDatabase issues: get / set / delete / scan_iter /
ping / aclose. Values are stored as bytes, as with decode_responses=False.
MATCH patterns follow Redis glob rules, including backslash escapes.

Usage:
    fake = FakeRedis()
    db = RedisDatabase(RedisConfig(), client=fake)
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


def _glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a Redis glob (``*``, ``?``, ``[...]``, ``\\x``) to a regex."""
    out: list[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\" and i + 1 < len(pattern):
            out.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if ch == "*":
            out.append(".*")
        elif ch == "?":
            out.append(".")
        elif ch == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                out.append(re.escape(ch))
            else:
                body = pattern[i + 1 : end]
                negate = body.startswith("^")
                if negate:
                    body = body[1:]
                chars = "".join("-" if c == "-" else re.escape(c) for c in body)
                out.append(f"[^{chars}]" if negate else f"[{chars}]")
                i = end
        else:
            out.append(re.escape(ch))
        i += 1
    return re.compile("".join(out), re.DOTALL)


class FakeRedis:
    """In-memory Redis stub for unit testing."""

    def __init__(self) -> None:
        self._store: dict[str, bytes] = {}
        self.closed = False
        self.ping_error: Exception | None = None

    async def set(self, key: str, value: bytes) -> None:
        self._store[key] = bytes(value)

    async def get(self, key: str) -> bytes | None:
        return self._store.get(key)

    async def delete(self, *keys: str) -> int:
        count = 0
        for k in keys:
            if k in self._store:
                del self._store[k]
                count += 1
        return count

    async def scan_iter(self, match: str = "*") -> AsyncIterator[bytes]:
        regex = _glob_to_regex(match)
        for k in list(self._store):
            if regex.fullmatch(k):
                yield k.encode()

    async def ping(self) -> bool:
        if self.ping_error is not None:
            raise self.ping_error
        return True

    async def aclose(self) -> None:
        self.closed = True
