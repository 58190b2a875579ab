"""FastAPI middleware for request tracing and the unhandled-error boundary."""

import time
import uuid
from datetime import datetime, timezone
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from waiter_errors.api.error_handlers import render_exception

logger = structlog.get_logger(__name__)


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Middleware to add correlation id tracing to all requests.

    Features:
    - Uses the client's x-cid header, or generates a UUID4 when absent
    - Records the receive time on request.state for error timestamps
    - Binds cid to structlog context (appears in all logs)
    - Renders any exception the routes let escape as a negotiated error
      response; the exception does not propagate further
    - Echoes x-cid on every response, errors included
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        """Process request with tracing context."""
        cid = request.headers.get("x-cid") or str(uuid.uuid4())
        request.state.cid = cid
        request.state.request_time = datetime.now(timezone.utc)

        structlog.contextvars.bind_contextvars(
            cid=cid,
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None,
        )

        logger.info(
            "Request started",
            query_params=dict(request.query_params) if request.query_params else None,
        )

        start_time = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                # Logged once by the boundary pipeline
                response = render_exception(request, exc)

            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )

            response.headers["x-cid"] = cid

            return response

        finally:
            # Clear context after request (prevent leakage to other requests)
            structlog.contextvars.clear_contextvars()
