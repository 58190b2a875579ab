"""
Request helpers.

Converts starlette requests into the plain mapping consumed by the error
context builder, plus small predicates over request headers and params.
"""

from datetime import datetime, timezone
from typing import Any, Mapping

from starlette.requests import Request


def request_from_starlette(
    request: Request, support_info: Any = None
) -> dict[str, Any]:
    """
    Build the context-builder request mapping from a starlette request.

    Identity fields (``principal``, ``descriptor``, ``instance``) and the
    receive time are read from ``request.state`` when upstream middleware
    or dependencies have set them. A correlation id generated by the
    tracing middleware is used when the client sent no ``x-cid``.
    """
    state = request.state
    headers = {name.lower(): value for name, value in request.headers.items()}
    cid = getattr(state, "cid", None)
    if cid and "x-cid" not in headers:
        headers["x-cid"] = cid

    return {
        "headers": headers,
        "request_method": request.method,
        "uri": request.url.path,
        "query_string": request.url.query,
        "request_time": getattr(state, "request_time", None) or datetime.now(timezone.utc),
        "support_info": support_info,
        "principal": getattr(state, "principal", None),
        "descriptor": getattr(state, "descriptor", None),
        "instance": getattr(state, "instance", None),
    }


def authority_to_host(authority: str | None) -> str | None:
    """Host part of ``host[:port]``."""
    if authority is None:
        return None
    return authority.split(":", 1)[0]


def authority_to_port(authority: str | None, default: Any = None) -> str:
    """Port part of ``host[:port]``, or ``str(default)`` when absent."""
    if authority and ":" in authority:
        return authority.split(":", 1)[1]
    return str(default)


def request_to_scheme(request: Mapping[str, Any]) -> str | None:
    """Scheme from ``x-forwarded-proto`` (lower-cased) or the request itself."""
    forwarded = (request.get("headers") or {}).get("x-forwarded-proto")
    if forwarded:
        return forwarded.lower()
    return request.get("scheme")


def same_origin(request: Mapping[str, Any]) -> bool:
    """True when ``origin`` equals ``<scheme>://<host>`` and all three are present."""
    headers = request.get("headers") or {}
    host = headers.get("host")
    origin = headers.get("origin")
    scheme = request_to_scheme(request)
    if not (host and origin and scheme):
        return False
    return origin == f"{scheme}://{host}"


def request_flag(params: Mapping[str, Any], flag: str) -> bool:
    """True only if ``flag`` is present in ``params`` and equals "true" (any case)."""
    return str(params.get(flag, "false")).lower() == "true"


def param_contains(params: Mapping[str, Any], key: str, value: str) -> bool:
    """True if param ``key`` equals ``value`` or, for multi-valued params, contains it."""
    param_value = params.get(key)
    if isinstance(param_value, str):
        return param_value == value
    if param_value:
        return any(item == value for item in param_value)
    return False


def request_debug_enabled(request: Mapping[str, Any]) -> bool:
    """True when the ``x-waiter-debug`` header is set."""
    return bool((request.get("headers") or {}).get("x-waiter-debug"))
