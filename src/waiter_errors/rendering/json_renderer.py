"""
JSON rendering with canonical stringification.

Values json cannot encode natively (datetimes, UUIDs, patterns, enums and
arbitrary handles) are converted to strings, recursing through nested
mappings and sequences. Mapping keys are stringified too, except None,
which has no string form and raises RenderError.
"""

import json
import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping
from uuid import UUID

from waiter_errors.errors.exceptions import RenderError
from waiter_errors.rendering.context import ErrorContext, date_to_str

ERROR_KEY = "waiter-error"

_JSON_SCALARS = (str, int, float, bool)


def stringify_key(key: Any) -> str:
    """Convert a mapping key to its JSON property name."""
    if key is None:
        raise RenderError("JSON object properties may not be None")
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, Enum):
        return str(key.value)
    return str(key)


def stringify_elements(value: Any) -> Any:
    """Recursively convert a value into json-encodable data."""
    if value is None or isinstance(value, _JSON_SCALARS) and not isinstance(value, Enum):
        return value
    if isinstance(value, Mapping):
        return {stringify_key(k): stringify_elements(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [stringify_elements(v) for v in value]
    if isinstance(value, datetime):
        return date_to_str(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return stringify_elements(value.value)
    if isinstance(value, re.Pattern):
        return value.pattern
    if isinstance(value, UUID):
        return str(value)
    return str(value)


def to_json(data: Any) -> str:
    """Serialize ``data`` to a JSON string after stringification."""
    return json.dumps(stringify_elements(data))


def render_json(context: ErrorContext) -> str:
    """Render an error context as ``{"waiter-error": {...}}``."""
    return to_json({ERROR_KEY: context.to_dict()})
