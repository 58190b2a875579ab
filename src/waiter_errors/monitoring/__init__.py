"""Monitoring and metrics module for waiter-errors."""

from waiter_errors.monitoring.metrics import (
    error_responses_total,
    record_error_response,
    retries_total,
)

__all__ = [
    "error_responses_total",
    "record_error_response",
    "retries_total",
]
