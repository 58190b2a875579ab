"""
Response assembly.

Combines a rendered body with status and headers. Headers supplied by the
caller always win: ``content-type`` and ``server`` are only filled in when
absent (case-insensitive).
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

import structlog

from waiter_errors.monitoring.metrics import record_error_response
from waiter_errors.rendering.context import ErrorContext
from waiter_errors.rendering.json_renderer import render_json
from waiter_errors.rendering.negotiation import Representation
from waiter_errors.rendering.templates import TemplateRenderer

logger = structlog.get_logger(__name__)

DEFAULT_ERROR_STATUS = 400


class ServerName:
    """
    Process-wide service identity sent in the ``server`` header.

    Reads are lock-free; ``reset`` swaps the value in a single assignment,
    so later reads see the last write.
    """

    def __init__(self, name: str = "waiter"):
        self._name = name

    def get(self) -> str:
        return self._name

    def reset(self, name: str) -> None:
        """Replace the service identity (startup or reconfiguration)."""
        logger.info("server name has been initialized", server_name=name)
        self._name = name


@dataclass(frozen=True)
class Response:
    """Final error response. Header names are lower-case."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))


def assoc_if_absent(headers: dict[str, str], name: str, value: str) -> dict[str, str]:
    """Set ``name`` only if no header with that name exists."""
    if name not in headers:
        headers[name] = value
    return headers


class ResponseAssembler:
    """
    Renders an ErrorContext in the negotiated representation and wraps it
    into a Response.

    Attributes:
        server_name: Service identity cell read on every assembly
        template_renderer: HTML/text renderer
    """

    def __init__(
        self,
        server_name: ServerName,
        template_renderer: TemplateRenderer | None = None,
    ):
        self.server_name = server_name
        self.template_renderer = template_renderer or TemplateRenderer()

    def render(self, representation: Representation, context: ErrorContext) -> str:
        """Render ``context`` as ``representation``."""
        if representation == Representation.JSON:
            return render_json(context)
        if representation == Representation.HTML:
            return self.template_renderer.render_html(context)
        return self.template_renderer.render_text(context)

    def build(
        self,
        representation: Representation,
        context: ErrorContext,
        headers: Mapping[str, Any] | None = None,
        status: int | None = None,
    ) -> Response:
        """
        Assemble the final response.

        Args:
            representation: Negotiated body format
            context: Error context to render
            headers: Caller-supplied headers (take precedence)
            status: Caller-supplied status, 400 when None

        Returns:
            Response with content-type and server headers guaranteed
        """
        status = status if status is not None else DEFAULT_ERROR_STATUS
        body = self.render(representation, context)
        response_headers = {str(k).lower(): str(v) for k, v in (headers or {}).items()}
        assoc_if_absent(response_headers, "content-type", representation.media_type)
        assoc_if_absent(response_headers, "server", self.server_name.get())
        record_error_response(representation.value, status)
        return Response(status=status, headers=response_headers, body=body)
