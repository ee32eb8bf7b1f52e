"""Logging for failures of the inner handles of a composite database.

A composite (the look-aside cache) owns two handles and either absorbs a
side's failure (close) or re-raises it wrapped (CacheError after a
committed database write). Each such failure is logged once as a
HandleFailure attached to the record under ``handle_failure``, so log
aggregation can filter on side and operation.

Only the key is recorded; stored values never enter the log.
"""

from __future__ import annotations

import logging
import traceback
from dataclasses import asdict, dataclass
from typing import Any, Literal

from src.shared.errors import CacheError

Side = Literal["database", "cache"]


@dataclass(frozen=True)
class HandleFailure:
    """One failed call into an inner handle."""

    side: Side
    operation: str
    error_code: str
    message: str
    key: str | None = None
    cause_code: str | None = None
    stack_trace: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _error_code(exc: BaseException) -> str:
    return getattr(exc, "code", type(exc).__name__)


def describe_failure(
    exc: BaseException,
    *,
    operation: str,
    side: Side | None = None,
    key: str | None = None,
) -> HandleFailure:
    """Build a HandleFailure for exc.

    A CacheError is attributed to the cache side, and the exception it was
    raised from is recorded as ``cause_code``. Any other exception needs an
    explicit side.

    Raises:
        ValueError: side is None and exc is not a CacheError.
    """
    if side is None:
        if not isinstance(exc, CacheError):
            msg = f"cannot infer the failing side of {type(exc).__name__}"
            raise ValueError(msg)
        side = "cache"

    cause = exc.__cause__
    return HandleFailure(
        side=side,
        operation=operation,
        error_code=_error_code(exc),
        message=str(exc),
        key=key,
        cause_code=_error_code(cause) if cause is not None else None,
        stack_trace="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    )


def log_handle_failure(
    logger: logging.Logger,
    exc: BaseException,
    *,
    operation: str,
    side: Side | None = None,
    key: str | None = None,
    level: int = logging.WARNING,
) -> HandleFailure:
    """Log exc as a failure of one inner handle and return the record."""
    failure = describe_failure(exc, operation=operation, side=side, key=key)
    logger.log(
        level,
        "%s %s failed: %s",
        failure.side,
        operation,
        failure.error_code,
        extra={"handle_failure": failure.to_dict()},
    )
    return failure
