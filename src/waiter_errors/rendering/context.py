"""
Error context construction.

Flattens a Failure and the request that triggered it into the record the
renderers consume. The request is a plain mapping with these keys, all
optional:

    headers         lower-cased header mapping (x-cid, host, ...)
    request_method  HTTP method
    uri             request path
    query_string    raw query string
    request_time    datetime the request was received
    support_info    support links shown on error pages
    principal       authenticated principal
    descriptor      service descriptor mapping (service_id)
    instance        service instance mapping (id)

``principal``, ``descriptor`` and ``instance`` may also be supplied through
the failure's details, which take precedence over the request.
"""

from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from waiter_errors.errors.failure import Failure


def date_to_str(value: datetime | None) -> str | None:
    """Render a datetime as UTC ISO-8601 with millisecond precision."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


class ErrorContext(BaseModel):
    """
    Flat, renderable view of a failure.

    Field aliases are the keys used in the JSON body.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cid: str | None = None
    details: Any = None
    host: str | None = None
    instance_id: Any = Field(default=None, alias="instance-id")
    message: str | None = None
    principal: Any = None
    query_string: str | None = Field(default=None, alias="query-string")
    request_method: str = Field(default="", alias="request-method")
    service_id: Any = Field(default=None, alias="service-id")
    status: int | None = None
    support_info: Any = Field(default=None, alias="support-info")
    timestamp: str | None = None
    uri: str | None = None

    def template_values(self) -> dict[str, Any]:
        """Context keyed by field name, for template substitution."""
        return {name: getattr(self, name) for name in type(self).model_fields}

    def to_dict(self) -> dict[str, Any]:
        """Context keyed by wire names, values left untouched."""
        return {
            field.alias or name: getattr(self, name)
            for name, field in type(self).model_fields.items()
        }


def _get_in(mapping: Any, key: str) -> Any:
    if isinstance(mapping, Mapping):
        return mapping.get(key)
    return None


def build_error_context(failure: Failure, request: Mapping[str, Any]) -> ErrorContext:
    """
    Merge a failure and its request into an ErrorContext.

    Args:
        failure: Classified failure
        request: Request mapping (see module docstring)

    Returns:
        ErrorContext ready for rendering
    """
    details = dict(failure.details)
    merged = {**request, **details}
    headers = request.get("headers") or {}
    method = request.get("request_method") or ""

    return ErrorContext(
        cid=headers.get("x-cid"),
        details=details,
        host=headers.get("host"),
        instance_id=_get_in(merged.get("instance"), "id"),
        message=failure.response_message,
        principal=merged.get("principal"),
        query_string=request.get("query_string"),
        request_method=str(method).upper(),
        service_id=_get_in(merged.get("descriptor"), "service_id"),
        status=failure.status,
        support_info=request.get("support_info"),
        timestamp=date_to_str(request.get("request_time") or failure.occurred_at),
        uri=request.get("uri"),
    )
