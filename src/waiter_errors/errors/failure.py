"""
Structured failure record.

A Failure is the normalized form of any exception that reaches the
response boundary. It is built by the classifier and never mutated.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class LogLevel(str, Enum):
    """Severity used when a failure is logged."""

    INFO = "info"
    WARN = "warn"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Failure:
    """
    Normalized failure ready for rendering.

    Attributes:
        cause: Underlying exception
        status: HTTP status (always set after classification)
        message: Primary message
        friendly_message: Optional hint shown after the message
        log_level: Severity for the single log entry of this failure
        headers: Response headers contributed by the failure (lower-cased keys)
        details: Structured data for the error context
        occurred_at: When the failure was classified
    """

    cause: BaseException
    status: int | None = None
    message: str | None = None
    friendly_message: str | None = None
    log_level: LogLevel = LogLevel.ERROR
    headers: Mapping[str, str] = field(default_factory=dict)
    details: Mapping[Any, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        """Freeze the mapping fields."""
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    @property
    def response_message(self) -> str:
        """Message shown to the client: message and friendly message, trimmed."""
        if self.message or self.friendly_message:
            return f"{self.message or ''}\n{self.friendly_message or ''}".strip()
        return str(self.cause)
