"""
FastAPI integration.

- error_handlers.py: Boundary exception handlers producing negotiated error responses
- requests.py: Starlette request adapter and request predicates
- responses.py: Success-path JSON responses (plain and streaming)
- middleware.py: Correlation id tracing and the unhandled-error boundary
"""

from waiter_errors.api.error_handlers import (
    EXCEPTION_HANDLERS,
    exception_to_response,
    render_exception,
)
from waiter_errors.api.middleware import RequestTracingMiddleware
from waiter_errors.api.responses import json_response, streaming_json_response

__all__ = [
    "EXCEPTION_HANDLERS",
    "RequestTracingMiddleware",
    "exception_to_response",
    "render_exception",
    "json_response",
    "streaming_json_response",
]
