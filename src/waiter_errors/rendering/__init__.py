"""
Error response rendering.

- negotiation.py: Representation and Accept/Content-Type resolution
- context.py: ErrorContext built from a Failure and its request
- json_renderer.py: JSON body with canonical stringification
- templates.py: HTML and plain-text bodies from Jinja2 templates
- assembler.py: ResponseAssembler, Response and the ServerName cell
"""

from waiter_errors.rendering.assembler import Response, ResponseAssembler, ServerName
from waiter_errors.rendering.context import ErrorContext, build_error_context, date_to_str
from waiter_errors.rendering.json_renderer import render_json, stringify_elements, to_json
from waiter_errors.rendering.negotiation import (
    Representation,
    request_to_representation,
    resolve,
)
from waiter_errors.rendering.templates import TemplateRenderer, urls_to_html_links

__all__ = [
    "ErrorContext",
    "Representation",
    "Response",
    "ResponseAssembler",
    "ServerName",
    "TemplateRenderer",
    "build_error_context",
    "date_to_str",
    "render_json",
    "request_to_representation",
    "resolve",
    "stringify_elements",
    "to_json",
    "urls_to_html_links",
]
