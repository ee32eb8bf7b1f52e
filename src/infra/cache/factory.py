"""Cache factory: selects the caching strategy for a database/cache pair.

No default strategy: an unset or misspelled cache type raises
NoCacheTypeError.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from src.infra.cache.lookaside import Lookaside
from src.ports.database_port import DatabasePort
from src.shared.errors import InvalidCacheError, InvalidDatabaseError, NoCacheTypeError


class CacheType(enum.Enum):
    LOOKASIDE = "lookaside"
    NONE = "none"


@dataclass(frozen=True)
class CacheConfig:
    """Inputs for dial().

    cache_type accepts a CacheType or its string value (case-insensitive).
    cache is required even for CacheType.NONE.
    """

    database: DatabasePort | None = None
    cache: DatabasePort | None = None
    cache_type: CacheType | str | None = None


def parse_cache_type(value: CacheType | str | None) -> CacheType:
    """Resolve a CacheType from an enum member or string.

    Raises:
        NoCacheTypeError: value is unset or not a known cache type.
    """
    if isinstance(value, CacheType):
        return value
    if isinstance(value, str) and value:
        try:
            return CacheType(value.strip().lower())
        except ValueError:
            pass
    raise NoCacheTypeError(value)


def dial(config: CacheConfig) -> DatabasePort:
    """Build the DatabasePort for the configured caching strategy.

    Returns:
        A Lookaside composite for CacheType.LOOKASIDE, or config.database
        itself, unwrapped, for CacheType.NONE.

    Raises:
        InvalidDatabaseError: config.database is None.
        InvalidCacheError: config.cache is None.
        NoCacheTypeError: config.cache_type is unset or unknown.
    """
    if config.database is None:
        raise InvalidDatabaseError
    if config.cache is None:
        raise InvalidCacheError

    cache_type = parse_cache_type(config.cache_type)
    if cache_type is CacheType.LOOKASIDE:
        return Lookaside(config.database, config.cache)
    return config.database
