"""
FastAPI exception handlers producing negotiated error responses.

Every exception reaching the app boundary goes through the same pipeline:

    classify -> log once -> build context -> negotiate -> render/assemble
"""

from typing import Any, Awaitable, Callable, Mapping

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response as StarletteResponse

from waiter_errors.api.requests import request_from_starlette
from waiter_errors.errors.classifier import classify, log_failure
from waiter_errors.errors.exceptions import ServiceError
from waiter_errors.errors.failure import LogLevel
from waiter_errors.rendering.assembler import Response, ResponseAssembler
from waiter_errors.rendering.context import build_error_context
from waiter_errors.rendering.negotiation import request_to_representation

ExceptionHandler = Callable[[Request, Any], Awaitable[StarletteResponse]]


def exception_to_response(
    exc: BaseException, request: Mapping[str, Any], assembler: ResponseAssembler
) -> Response:
    """
    Convert an exception into an error Response.

    Args:
        exc: Exception that reached the boundary
        request: Request mapping (see waiter_errors.rendering.context)
        assembler: Response assembler

    Returns:
        Response in the representation negotiated from ``request``

    Raises:
        RenderError: If the context cannot be rendered (e.g. a None key)
    """
    failure = classify(exc)
    log_failure(failure)
    context = build_error_context(failure, request)
    representation = request_to_representation(request)
    return assembler.build(representation, context, failure.headers, failure.status)


def to_starlette_response(response: Response) -> StarletteResponse:
    return StarletteResponse(
        content=response.body,
        status_code=response.status,
        headers=dict(response.headers),
    )


def http_exception_to_service_error(exc: StarletteHTTPException) -> ServiceError:
    """Carry an HTTPException's status, detail and headers into a ServiceError."""
    return ServiceError(
        str(exc.detail),
        exc.status_code,
        log_level=LogLevel.INFO if exc.status_code < 500 else LogLevel.ERROR,
        headers=exc.headers,
    )


def render_exception(request: Request, exc: BaseException) -> StarletteResponse:
    """
    Run the boundary pipeline for a starlette request.

    The assembler and support links are read from ``request.app.state``,
    where ``create_app`` installs them.
    """
    state = request.app.state
    request_map = request_from_starlette(request, getattr(state, "support_info", None))
    return to_starlette_response(exception_to_response(exc, request_map, state.assembler))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> StarletteResponse:
    """Starlette/FastAPI HTTP errors keep their status and headers."""
    return render_exception(request, http_exception_to_service_error(exc))


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> StarletteResponse:
    """Invalid request format maps to 400 Bad Request."""
    error = ServiceError(
        "Request validation failed",
        400,
        log_level=LogLevel.WARN,
        details={"errors": exc.errors()},
    )
    return render_exception(request, error)


async def service_error_handler(request: Request, exc: ServiceError) -> StarletteResponse:
    """ServiceErrors keep their status; a missing status becomes 500."""
    return render_exception(request, exc)


# Exception handler mapping for FastAPI app.add_exception_handler().
# Every other exception is rendered by RequestTracingMiddleware.
EXCEPTION_HANDLERS: dict[Any, ExceptionHandler] = {
    StarletteHTTPException: http_error_handler,
    RequestValidationError: request_validation_error_handler,
    ServiceError: service_error_handler,
}
