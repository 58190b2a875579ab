"""
Failure classification.

Normalizes any exception into a Failure. The rule is deliberately narrow:
a ServiceError with an explicit status passes through as-is, everything
else becomes a 500 "Internal error" whose cause is the original exception.
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator, Mapping

import structlog

from waiter_errors.errors.exceptions import ServiceError
from waiter_errors.errors.failure import Failure, LogLevel

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_STATUS = 500
INTERNAL_ERROR_PREFIX = "Internal error: "


def _normalize_headers(headers: Mapping[Any, Any]) -> dict[str, str]:
    return {str(name).lower(): str(value) for name, value in headers.items()}


def classify(exc: BaseException) -> Failure:
    """
    Convert an exception into a Failure.

    Args:
        exc: Any exception reaching the response boundary

    Returns:
        Failure with a status always set
    """
    if isinstance(exc, ServiceError) and exc.status is not None:
        return Failure(
            cause=exc,
            status=exc.status,
            message=exc.message,
            friendly_message=exc.friendly_message,
            log_level=exc.log_level,
            headers=_normalize_headers(exc.headers),
            details=exc.details,
        )

    message = exc.message if isinstance(exc, ServiceError) else str(exc)
    return Failure(
        cause=exc,
        status=INTERNAL_ERROR_STATUS,
        message=f"{INTERNAL_ERROR_PREFIX}{message}",
    )


def log_failure(failure: Failure) -> None:
    """Log a classified failure once, at the failure's own severity."""
    message = failure.response_message
    if failure.log_level == LogLevel.INFO:
        logger.info(message, status=failure.status)
    elif failure.log_level == LogLevel.WARN:
        logger.warning(message, status=failure.status)
    else:
        logger.error(message, status=failure.status, exc_info=failure.cause)


def update_exception(
    exc: BaseException, update_fn: Callable[[dict[Any, Any]], Mapping[Any, Any]]
) -> ServiceError:
    """
    Return a ServiceError whose details are ``update_fn(details)``.

    ServiceErrors keep their status, messages, headers and original cause;
    any other exception becomes the cause of a status-less ServiceError.
    """
    if isinstance(exc, ServiceError):
        updated = ServiceError(
            exc.message,
            exc.status,
            friendly_message=exc.friendly_message,
            log_level=exc.log_level,
            headers=exc.headers,
            details=update_fn(dict(exc.details)),
        )
        updated.__cause__ = exc.__cause__ or exc
    else:
        updated = ServiceError(str(exc), details=update_fn({}))
        updated.__cause__ = exc
    return updated


@contextmanager
def log_and_suppress(message: str) -> Iterator[None]:
    """
    Log and suppress any exception raised inside the block.

    Intended for best-effort cleanup where failure must not mask the
    primary result:

        with log_and_suppress("unable to close connection"):
            conn.close()
    """
    try:
        yield
    except Exception as e:
        logger.error(message, exc_info=e)
