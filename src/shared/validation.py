"""Key and value validation shared by every backend.

Backends call these before touching storage. An empty value is treated as
indistinguishable from absence and is rejected at the API boundary.
"""

from __future__ import annotations

from src.shared.errors import InvalidDataError, InvalidKeyError


def valid_key(key: str | None) -> None:
    """Raise InvalidKeyError unless the key is non-empty."""
    if not key:
        raise InvalidKeyError


def valid_data(value: bytes | None) -> None:
    """Raise InvalidDataError unless the value is non-empty."""
    if not value:
        raise InvalidDataError
