"""
Integration tests for the FastAPI error boundary.

Routes raise exceptions (directly or after exhausting retries) and the
tests check the negotiated responses returned by TestClient.
"""

import json

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from waiter_errors.app import create_app
from waiter_errors.config import Settings
from waiter_errors.errors.exceptions import ServiceError
from waiter_errors.retry.executor import RetryExecutor
from waiter_errors.retry.policy import RetryPolicy


class UpstreamUnavailable(Exception):
    """Dependency failure used by the retrying route."""


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    test_settings.SUPPORT_INFO = [{"label": "Runbook", "url": "http://runbook.example.com"}]
    app = create_app(test_settings)
    calls = {"count": 0}
    executor = RetryExecutor(sleep=lambda delay_ms: None)

    @app.get("/missing")
    async def missing():
        raise ServiceError("not found", 404, details={"service_id": "svc-1"})

    @app.get("/crash")
    async def crash():
        raise RuntimeError("kaboom")

    @app.get("/forbidden")
    async def forbidden():
        raise HTTPException(status_code=403, detail="go away see http://help.example.com")

    @app.get("/flaky")
    async def flaky():
        def call_upstream():
            calls["count"] += 1
            raise UpstreamUnavailable(f"upstream down (call {calls['count']})")

        return executor.run(RetryPolicy(max_retries=3), call_upstream)

    @app.get("/items/{item_id}")
    async def item(item_id: int):
        return {"item_id": item_id}

    app.state.calls = calls
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def test_text_plain_404(client: TestClient):
    """Test Accept text/plain yields an indented text body with the failure status."""
    response = client.get("/missing", headers={"accept": "text/plain"})

    assert response.status_code == 404
    assert response.headers["content-type"] == "text/plain"
    assert response.headers["server"] == "waiter-test"
    assert "not found" in response.text
    assert not response.text.endswith("\n  ")
    assert "Runbook: http://runbook.example.com" in response.text


def test_json_404(client: TestClient):
    """Test Accept application/json yields the waiter-error envelope."""
    response = client.get(
        "/missing", headers={"accept": "text/html, application/json", "x-cid": "cid-42"}
    )

    assert response.status_code == 404
    assert response.headers["content-type"] == "application/json"
    error = response.json()["waiter-error"]
    assert error["message"] == "not found"
    assert error["cid"] == "cid-42"
    assert error["request-method"] == "GET"
    assert error["uri"] == "/missing"
    assert error["details"] == {"service_id": "svc-1"}
    assert error["support-info"] == [{"label": "Runbook", "url": "http://runbook.example.com"}]
    assert error["timestamp"].endswith("Z")


def test_html_unhandled_exception(client: TestClient):
    """Test unexpected exceptions render as a 500 HTML page."""
    response = client.get("/crash", headers={"accept": "text/html"})

    assert response.status_code == 500
    assert response.headers["content-type"] == "text/html"
    assert "Internal error: kaboom" in response.text


def test_http_exception_links_urls(client: TestClient):
    """Test HTTPException keeps its status and URLs become links in HTML."""
    response = client.get("/forbidden", headers={"accept": "text/html"})

    assert response.status_code == 403
    assert '<a href="http://help.example.com">http://help.example.com</a>' in response.text


def test_default_representation_is_text(client: TestClient):
    """Test no Accept header falls back to text/plain."""
    response = client.get("/crash", headers={"accept": ""})

    assert response.status_code == 500
    assert response.headers["content-type"] == "text/plain"


def test_unknown_route(client: TestClient):
    """Test router 404s go through the same pipeline."""
    response = client.get("/nope", headers={"accept": "application/json"})

    assert response.status_code == 404
    assert response.json()["waiter-error"]["message"] == "Not Found"


def test_request_validation_error(client: TestClient):
    """Test invalid path params map to 400 with the validation errors as details."""
    response = client.get("/items/abc", headers={"accept": "application/json"})

    assert response.status_code == 400
    error = response.json()["waiter-error"]
    assert error["message"] == "Request validation failed"
    assert error["details"]["errors"][0]["loc"] == ["path", "item_id"]


def test_retry_exhaustion_surfaces_last_failure(client: TestClient, app: FastAPI):
    """Test an exhausted retry renders the final attempt's failure."""
    response = client.get("/flaky", headers={"content-type": "application/json"})

    assert app.state.calls["count"] == 3
    assert response.status_code == 500
    assert response.json()["waiter-error"]["message"] == (
        "Internal error: upstream down (call 3)"
    )


def test_success_path_echoes_cid(client: TestClient):
    """Test tracing middleware echoes the client correlation id."""
    response = client.get("/health", headers={"x-cid": "trace-1"})

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["x-cid"] == "trace-1"
    assert response.headers["server"] == "waiter-test"


def test_server_name_reset_applies_to_later_responses(client: TestClient, app: FastAPI):
    """Test swapping the identity cell changes subsequent server headers."""
    app.state.server_name.reset("waiter-blue")

    response = client.get("/missing", headers={"accept": "application/json"})

    assert response.headers["server"] == "waiter-blue"


def test_root_endpoint(client: TestClient):
    """Test root endpoint returns service info."""
    response = client.get("/")

    data = json.loads(response.content)
    assert data["service"] == "Waiter Errors (Test)"
    assert data["metrics"] is None


def test_unhandled_exception_is_contained(client: TestClient):
    """Test an unhandled exception is rendered, logged once and not re-raised."""
    with capture_logs() as logs:
        response = client.get("/crash", headers={"accept": "application/json", "x-cid": "c-9"})

    assert response.status_code == 500
    assert response.json()["waiter-error"]["message"] == "Internal error: kaboom"
    assert response.headers["x-cid"] == "c-9"
    errors = [log for log in logs if log["log_level"] == "error"]
    assert [log["event"] for log in errors] == ["Internal error: kaboom"]
    assert any(
        log["event"] == "Request completed" and log["status_code"] == 500 for log in logs
    )
