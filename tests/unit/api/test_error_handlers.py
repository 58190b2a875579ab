"""
Unit tests for the boundary pipeline (exception_to_response).

Tests classification, logging and negotiation working together without
the web framework.
"""

import json

import pytest
from starlette.exceptions import HTTPException
from structlog.testing import capture_logs

from waiter_errors.api.error_handlers import (
    exception_to_response,
    http_exception_to_service_error,
    to_starlette_response,
)
from waiter_errors.errors.exceptions import RenderError, ServiceError
from waiter_errors.errors.failure import LogLevel
from waiter_errors.rendering.assembler import ResponseAssembler


def test_text_plain_not_found(assembler: ResponseAssembler, create_request):
    """Test a 404 with Accept text/plain renders as indented text."""
    response = exception_to_response(
        ServiceError("not found", 404), create_request(accept="text/plain"), assembler
    )

    assert response.status == 404
    assert response.headers["content-type"] == "text/plain"
    assert "not found" in response.body
    assert not response.body.endswith("\n  ")


def test_unhandled_exception_json(assembler: ResponseAssembler, create_request):
    """Test plain exceptions become 500 JSON errors."""
    response = exception_to_response(
        ValueError("bad state"), create_request(content_type="application/json"), assembler
    )

    error = json.loads(response.body)["waiter-error"]
    assert response.status == 500
    assert error["message"] == "Internal error: bad state"
    assert error["status"] == 500


def test_failure_headers_flow_to_response(assembler: ResponseAssembler, create_request):
    """Test failure headers are kept, including a conflicting content-type."""
    exc = ServiceError(
        "slow down", 429, headers={"Retry-After": 5, "Content-Type": "application/problem+json"}
    )

    response = exception_to_response(exc, create_request(accept="application/json"), assembler)

    assert response.headers["retry-after"] == "5"
    assert response.headers["content-type"] == "application/problem+json"
    assert response.headers["server"] == "waiter-test"


def test_exactly_one_log_entry(assembler: ResponseAssembler, create_request):
    """Test one log entry at the failure's severity per converted exception."""
    with capture_logs() as logs:
        exception_to_response(
            ServiceError("moved", 410, log_level=LogLevel.WARN), create_request(), assembler
        )

    assert [(log["event"], log["log_level"]) for log in logs] == [("moved", "warning")]


def test_none_key_fails_loudly(assembler: ResponseAssembler, create_request):
    """Test JSON rendering of a None detail key propagates RenderError."""
    exc = ServiceError("bad", 400, details={None: "x"})

    with pytest.raises(RenderError):
        exception_to_response(exc, create_request(accept="application/json"), assembler)


def test_http_exception_conversion():
    """Test HTTPException status, detail and headers are carried over."""
    error = http_exception_to_service_error(
        HTTPException(status_code=401, detail="no token", headers={"WWW-Authenticate": "Bearer"})
    )

    assert error.status == 401
    assert error.message == "no token"
    assert error.headers == {"WWW-Authenticate": "Bearer"}
    assert error.log_level == LogLevel.INFO
    assert http_exception_to_service_error(HTTPException(502)).log_level == LogLevel.ERROR


def test_to_starlette_response(assembler: ResponseAssembler, create_request):
    """Test conversion keeps status, headers and body."""
    response = exception_to_response(
        ServiceError("teapot", 418), create_request(accept="text/html"), assembler
    )

    starlette_response = to_starlette_response(response)

    assert starlette_response.status_code == 418
    assert starlette_response.headers["content-type"] == "text/html"
    assert starlette_response.headers["server"] == "waiter-test"
    assert b"teapot" in starlette_response.body
