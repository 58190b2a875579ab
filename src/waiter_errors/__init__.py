"""
Failure handling for HTTP-facing services.

Two concerns live here:
- Bounded exponential-backoff retry around fallible calls
- Conversion of unhandled failures into deterministic, content-negotiated
  error responses (JSON, HTML or plain text)

Architecture: retry executor + failure classifier + negotiated renderers,
wired into FastAPI through a single boundary exception handler.
"""

__version__ = "0.1.0"
