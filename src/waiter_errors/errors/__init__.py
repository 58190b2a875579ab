"""
Failure model and classification.

- failure.py: Failure record and LogLevel
- exceptions.py: ServiceError (raised by application code) and RenderError
- classifier.py: classify(), log_failure() and exception helpers
"""

from waiter_errors.errors.classifier import (
    classify,
    log_and_suppress,
    log_failure,
    update_exception,
)
from waiter_errors.errors.exceptions import RenderError, ServiceError
from waiter_errors.errors.failure import Failure, LogLevel

__all__ = [
    "Failure",
    "LogLevel",
    "RenderError",
    "ServiceError",
    "classify",
    "log_and_suppress",
    "log_failure",
    "update_exception",
]
