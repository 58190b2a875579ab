"""
Success-path JSON responses.

Bodies go through the same stringification as JSON error bodies and carry
the current ``server`` identity.
"""

import json
from typing import Any, Iterator, Mapping

import structlog
from starlette.responses import Response, StreamingResponse

from waiter_errors.rendering.assembler import ServerName
from waiter_errors.rendering.json_renderer import stringify_elements, to_json

logger = structlog.get_logger(__name__)

JSON_MEDIA_TYPE = "application/json"


def json_response(
    data: Any,
    server_name: ServerName,
    status: int = 200,
    headers: Mapping[str, str] | None = None,
) -> Response:
    """JSON response; ``content-type`` and ``server`` override caller headers."""
    response_headers = {str(k).lower(): str(v) for k, v in (headers or {}).items()}
    response_headers["content-type"] = JSON_MEDIA_TYPE
    response_headers["server"] = server_name.get()
    return Response(content=to_json(data), status_code=status, headers=response_headers)


def streaming_json_response(
    data: Any, server_name: ServerName, status: int = 200
) -> StreamingResponse:
    """
    JSON response encoded incrementally while it is sent.

    Stringification happens up front so key errors surface before the
    response starts; encoding failures during streaming are logged and
    re-raised.
    """
    payload = stringify_elements(data)

    def _chunks() -> Iterator[str]:
        try:
            yield from json.JSONEncoder().iterencode(payload)
        except Exception as e:
            logger.error("Exception creating streaming json response", exc_info=e)
            raise

    return StreamingResponse(
        _chunks(),
        status_code=status,
        headers={"content-type": JSON_MEDIA_TYPE, "server": server_name.get()},
    )
