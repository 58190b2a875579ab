"""Custom Prometheus metrics for waiter-errors.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- waiter_retries_total (sustained growth indicates an unstable dependency)
- waiter_error_responses_total (5xx share of rendered errors)
"""

from prometheus_client import Counter

# === Retry Metrics ===

retries_total = Counter(
    "waiter_retries_total",
    "Total backoff sleeps taken before a retry",
)
"""
Incremented once per retry, immediately before the backoff sleep.

The first invocation of an operation is never counted, so a run that
succeeds first time contributes nothing.
"""

# === Error Response Metrics ===

error_responses_total = Counter(
    "waiter_error_responses_total",
    "Total error responses rendered by representation and status",
    ["representation", "status"],
)
"""
Error responses counter.

Labels:
- representation: json, html, text
- status: HTTP status code of the rendered response

Alert thresholds:
- WARN: status=500 rate > 1% of total requests
"""


def record_error_response(representation: str, status: int) -> None:
    """Record a rendered error response."""
    error_responses_total.labels(representation=representation, status=str(status)).inc()
