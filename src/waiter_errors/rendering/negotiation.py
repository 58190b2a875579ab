"""
Content negotiation for error responses.

Checks are substring matches evaluated in a fixed order; quality weights
and the order of media ranges inside the Accept header are ignored.
"""

from enum import Enum
from typing import Any, Mapping


class Representation(str, Enum):
    """Supported error body formats."""

    JSON = "json"
    HTML = "html"
    TEXT = "text"

    @property
    def media_type(self) -> str:
        return MEDIA_TYPES[self]


MEDIA_TYPES = {
    Representation.JSON: "application/json",
    Representation.HTML: "text/html",
    Representation.TEXT: "text/plain",
}


def resolve(accept: str | None, content_type: str | None) -> Representation:
    """
    Pick the response representation.

    Order: Accept contains application/json, text/html, text/plain; then a
    request Content-Type of exactly application/json; otherwise text.
    """
    if accept:
        if "application/json" in accept:
            return Representation.JSON
        if "text/html" in accept:
            return Representation.HTML
        if "text/plain" in accept:
            return Representation.TEXT
    if content_type == "application/json":
        return Representation.JSON
    return Representation.TEXT


def request_to_representation(request: Mapping[str, Any]) -> Representation:
    """Resolve the representation from a request mapping's headers."""
    headers = request.get("headers") or {}
    return resolve(headers.get("accept"), headers.get("content-type"))
