"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

from datetime import datetime, timezone
from typing import Any, Dict

import pytest

from waiter_errors.config import Settings
from waiter_errors.rendering.assembler import ResponseAssembler, ServerName
from waiter_errors.rendering.templates import TemplateRenderer


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.SERVER_NAME = "custom"
    """
    return Settings(
        # === Application ===
        APP_NAME="Waiter Errors (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Response identity ===
        SERVER_NAME="waiter-test",

        # === Retry defaults ===
        RETRY_DELAY_MULTIPLIER=2.0,
        RETRY_INITIAL_DELAY_MS=10,
        RETRY_MAX_DELAY_MS=50,
        RETRY_MAX_RETRIES=3,

        PROMETHEUS_ENABLED=False,  # Metrics registry is process-global
    )


@pytest.fixture
def request_time() -> datetime:
    """Fixed request receive time."""
    return datetime(2026, 1, 15, 9, 30, 0, 123000, tzinfo=timezone.utc)


@pytest.fixture
def create_request(request_time: datetime):
    """Factory fixture to create request mappings for the context builder.

    Usage:
        def test_something(create_request):
            request = create_request(accept="text/html")
    """
    def _create(
        accept: str | None = None,
        content_type: str | None = None,
        method: str | None = "get",
        uri: str = "/apps/demo",
        **extra: Any,
    ) -> Dict[str, Any]:
        headers = {"host": "waiter.example.com", "x-cid": "cid-123"}
        if accept is not None:
            headers["accept"] = accept
        if content_type is not None:
            headers["content-type"] = content_type
        request = {
            "headers": headers,
            "request_method": method,
            "uri": uri,
            "query_string": "a=1",
            "request_time": request_time,
        }
        request.update(extra)
        return request

    return _create


@pytest.fixture
def server_name() -> ServerName:
    """Service identity cell for assembled responses."""
    return ServerName("waiter-test")


@pytest.fixture
def assembler(server_name: ServerName) -> ResponseAssembler:
    """ResponseAssembler using the packaged templates."""
    return ResponseAssembler(server_name, TemplateRenderer())
