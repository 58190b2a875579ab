"""
Unit tests for success-path JSON responses.
"""

import json
from uuid import UUID

import pytest

from waiter_errors.api.responses import json_response, streaming_json_response
from waiter_errors.errors.exceptions import RenderError
from waiter_errors.rendering.assembler import ServerName


def test_json_response(server_name: ServerName):
    """Test body stringification and forced headers."""
    response = json_response(
        {"id": UUID("12345678-1234-5678-1234-567812345678")},
        server_name,
        status=201,
        headers={"X-Extra": "1", "Content-Type": "text/plain"},
    )

    assert response.status_code == 201
    assert json.loads(response.body) == {"id": "12345678-1234-5678-1234-567812345678"}
    assert response.headers["content-type"] == "application/json"
    assert response.headers["server"] == "waiter-test"
    assert response.headers["x-extra"] == "1"


def test_streaming_json_response_rejects_none_keys_up_front(server_name: ServerName):
    """Test key errors surface before streaming starts."""
    with pytest.raises(RenderError):
        streaming_json_response({None: 1}, server_name)


@pytest.mark.asyncio
async def test_streaming_json_response_body(server_name: ServerName):
    """Test streamed chunks join into the JSON document."""
    response = streaming_json_response({"items": [1, 2, {"a": None}]}, server_name)

    chunks = [chunk async for chunk in response.body_iterator]

    assert json.loads("".join(chunks)) == {"items": [1, 2, {"a": None}]}
    assert response.headers["content-type"] == "application/json"
    assert response.headers["server"] == "waiter-test"
