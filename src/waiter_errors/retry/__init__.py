"""
Bounded exponential-backoff retry.

Main Components:
    - RetryPolicy: Immutable backoff parameters
    - RetryExecutor: Runs an operation under a policy (sync and async)
    - retry_strategy: Binds a policy into a reusable retry function

Usage:
    >>> from waiter_errors.retry import RetryExecutor, RetryPolicy
    >>> RetryExecutor().run(RetryPolicy(max_retries=3), lambda: "ok")
    'ok'
"""

from waiter_errors.retry.executor import RetryExecutor, backoff_schedule, retry_strategy
from waiter_errors.retry.policy import RetryPolicy

__all__ = [
    "RetryExecutor",
    "RetryPolicy",
    "backoff_schedule",
    "retry_strategy",
]
