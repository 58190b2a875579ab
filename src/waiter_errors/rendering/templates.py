"""
Template-backed HTML and plain-text error rendering.

Templates are Jinja2 files (``error.html``, ``error.txt``) that only
substitute variables from the error context. Anything needing structure
(links, pretty-printed details, support lists) is formatted here first.
"""

import re
from pathlib import Path
from pprint import pformat
from typing import Any

import structlog
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from waiter_errors.rendering.context import ErrorContext

logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "web"
HTML_TEMPLATE = "error.html"
TEXT_TEMPLATE = "error.txt"

_URL_PATTERN = re.compile(r"(https?://[^\s]+)")
_TRAILING_INDENT = re.compile(r"\n  \Z")


def urls_to_html_links(message: str | None) -> Markup | None:
    """
    Escape ``message`` and wrap each http(s) URL in an anchor.

    >>> urls_to_html_links("see http://example.com/docs")
    Markup('see <a href="http://example.com/docs">http://example.com/docs</a>')
    """
    if message is None:
        return None
    return Markup(_URL_PATTERN.sub(r'<a href="\1">\1</a>', str(escape(message))))


def _support_links(support_info: Any) -> list[tuple[str, str]]:
    links = []
    for entry in support_info or []:
        if isinstance(entry, dict):
            links.append((str(entry.get("label", "")), str(entry.get("url", ""))))
        else:
            links.append((str(entry), ""))
    return links


def _indent_lines(text: str) -> str:
    return text.replace("\n", "\n  ")


class TemplateRenderer:
    """
    Renders error contexts through the HTML and text templates.

    Attributes:
        templates_dir: Directory holding error.html and error.txt
        jinja_env: Jinja2 environment (None renders as empty string)
    """

    def __init__(self, templates_dir: Path | str | None = None):
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html"]),
            keep_trailing_newline=True,
            finalize=lambda value: "" if value is None else value,
        )
        logger.debug("Error templates loaded", templates_dir=str(self.templates_dir))

    def render_html(self, context: ErrorContext) -> str:
        """Render the HTML error page."""
        values = context.template_values()
        values["message"] = urls_to_html_links(context.message)
        values["details"] = pformat(context.details) if context.details is not None else None
        values["support_info"] = Markup("").join(
            Markup('<li><a href="{}">{}</a></li>').format(url, label) if url
            else Markup("<li>{}</li>").format(label)
            for label, url in _support_links(context.support_info)
        )
        return self.jinja_env.get_template(HTML_TEMPLATE).render(**values)

    def render_text(self, context: ErrorContext) -> str:
        """
        Render the plain-text error body.

        Every line after the first is indented by two spaces, including the
        lines of the pretty-printed details. The indentation that would
        follow a final newline is dropped.
        """
        values = context.template_values()
        if context.details is not None:
            values["details"] = _indent_lines(pformat(context.details))
        values["support_info"] = "\n".join(
            f"{label}: {url}" if url else label
            for label, url in _support_links(context.support_info)
        )
        rendered = self.jinja_env.get_template(TEXT_TEMPLATE).render(**values)
        return _TRAILING_INDENT.sub("\n", _indent_lines(rendered))
