"""
Exceptions raised and consumed by the error-response pipeline.

ServiceError is the explicit failure variant that application code raises
when it knows the HTTP status it wants to surface. Anything else that
reaches the boundary is treated as an internal error.
"""

from typing import Any, Mapping

from waiter_errors.errors.failure import LogLevel


class ServiceError(Exception):
    """
    Failure carrying its own response metadata.

    Attributes:
        message: Human-readable error description
        status: HTTP status to respond with (None means "internal error")
        friendly_message: Optional extra hint appended to the message
        log_level: Severity used when the failure is logged
        headers: Extra response headers
        details: Structured data rendered into the error context
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        *,
        friendly_message: str | None = None,
        log_level: LogLevel | str = LogLevel.ERROR,
        headers: Mapping[str, Any] | None = None,
        details: Mapping[Any, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.friendly_message = friendly_message
        self.log_level = LogLevel(log_level)
        self.headers = dict(headers or {})
        self.details = dict(details or {})


class RenderError(Exception):
    """
    Raised when an error context cannot be rendered.

    JSON rendering raises this for mapping entries whose key is None.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
