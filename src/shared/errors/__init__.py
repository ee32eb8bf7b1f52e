"""Unified error hierarchy for the key-value layer.

All errors raised by this package inherit from KVError. Callers tell the
kinds apart by class (``except NotFoundError``), never by message text.
Exceptions raised by a backend's client library are not translated and
propagate as-is.
"""

from __future__ import annotations


class KVError(Exception):
    """Base error for all key-value layer exceptions."""

    def __init__(self, message: str, code: str = "KV_ERROR") -> None:
        self.code = code
        super().__init__(message)


# -- Configuration errors (raised at dial time) --


class InvalidDatabaseError(KVError):
    """A required Database handle was not provided."""

    def __init__(
        self,
        message: str = "database cannot be None",
        code: str = "INVALID_DATABASE",
    ) -> None:
        super().__init__(message, code=code)


class InvalidCacheError(InvalidDatabaseError):
    """The cache Database handle was not provided."""

    def __init__(self, message: str = "cache cannot be None") -> None:
        super().__init__(message, code="INVALID_CACHE")


class NoCacheTypeError(KVError):
    """The cache type selector is unset or not recognised."""

    def __init__(self, cache_type: object = None) -> None:
        self.cache_type = cache_type
        super().__init__(
            f"cache type must be one of 'lookaside' or 'none', got {cache_type!r}",
            code="NO_CACHE_TYPE",
        )


# -- Input validation errors --


class InvalidKeyError(KVError):
    """Key is empty."""

    def __init__(self, message: str = "Key cannot be empty") -> None:
        super().__init__(message, code="INVALID_KEY")


class InvalidDataError(KVError):
    """Value is empty."""

    def __init__(self, message: str = "Data cannot be empty") -> None:
        super().__init__(message, code="INVALID_DATA")


# -- Lookup / connection state --


class NotFoundError(KVError):
    """Nil value: the key is not present in the database."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Nil value returned from database for key: {key}", code="NOT_FOUND")


class NoConnectionError(KVError):
    """Operation attempted on a handle that was never dialed or is closed."""

    def __init__(self, message: str = "No database connection defined, did you dial?") -> None:
        super().__init__(message, code="NO_CONNECTION")


# -- Composite errors --


class CacheError(KVError):
    """The cache side of a composite failed after the database side succeeded.

    The underlying cache exception is available as ``__cause__``. When raised
    from a read-through, ``value`` holds the value already fetched from the
    database.
    """

    def __init__(self, cause: BaseException, value: bytes | None = None) -> None:
        self.value = value
        super().__init__(f"cache error: {cause}", code="CACHE_ERROR")


__all__ = [
    "CacheError",
    "InvalidCacheError",
    "InvalidDataError",
    "InvalidDatabaseError",
    "InvalidKeyError",
    "KVError",
    "NoCacheTypeError",
    "NoConnectionError",
    "NotFoundError",
]
