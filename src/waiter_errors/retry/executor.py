"""
Retry executor with bounded exponential backoff.

Runs a no-argument operation until it returns without raising or the
policy's attempt budget is spent. The failure raised by the final attempt
propagates to the caller unmodified.

Backoff schedule:
    sleep_ms = min(max_delay_ms, tracked_delay)
    tracked_delay *= delay_multiplier   (unclamped)

Usage:
    executor = RetryExecutor()
    result = executor.run(RetryPolicy(max_retries=3), fetch_descriptor)
"""

import asyncio
import time
from typing import Awaitable, Callable, Iterator, TypeVar

import structlog

from waiter_errors.monitoring.metrics import retries_total
from waiter_errors.retry.policy import RetryPolicy

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def backoff_schedule(policy: RetryPolicy) -> Iterator[tuple[float, int]]:
    """
    Yield ``(tracked_delay_ms, sleep_ms)`` for each successive retry.

    The tracked delay keeps growing past ``max_delay_ms``; only the sleep
    is clamped.
    """
    tracked_delay_ms = float(policy.initial_delay_ms)
    while True:
        yield tracked_delay_ms, int(min(policy.max_delay_ms, tracked_delay_ms))
        tracked_delay_ms = tracked_delay_ms * policy.delay_multiplier


def _sleep_ms(delay_ms: int) -> None:
    time.sleep(delay_ms / 1000.0)


async def _async_sleep_ms(delay_ms: int) -> None:
    await asyncio.sleep(delay_ms / 1000.0)


def _log_retry(delay_ms: int, attempt: int) -> None:
    logger.info(
        f"sleeping {delay_ms} ms before retry #{attempt}",
        delay_ms=delay_ms,
        attempt=attempt,
    )
    retries_total.inc()


class RetryExecutor:
    """
    Executes fallible operations under a RetryPolicy.

    Every call keeps its own attempt counter and backoff schedule, so a
    single executor can serve concurrent callers.

    Attributes:
        sleep: Blocking sleep taking milliseconds
        async_sleep: Awaitable sleep taking milliseconds
    """

    def __init__(
        self,
        sleep: Callable[[int], None] = _sleep_ms,
        async_sleep: Callable[[int], Awaitable[None]] = _async_sleep_ms,
    ):
        self.sleep = sleep
        self.async_sleep = async_sleep

    def run(self, policy: RetryPolicy, operation: Callable[[], T]) -> T:
        """
        Invoke ``operation`` until it succeeds or ``policy.max_retries`` is reached.

        Args:
            policy: Backoff parameters
            operation: No-argument callable

        Returns:
            The value returned by the first successful invocation

        Raises:
            Exception: Whatever the last invocation raised, unwrapped
        """
        schedule = backoff_schedule(policy)
        attempt = 0
        while True:
            attempt += 1
            try:
                return operation()
            except Exception:
                if attempt >= policy.max_retries:
                    raise
            _, delay_ms = next(schedule)
            _log_retry(delay_ms, attempt)
            self.sleep(delay_ms)

    async def run_async(
        self, policy: RetryPolicy, operation: Callable[[], Awaitable[T]]
    ) -> T:
        """
        Coroutine counterpart of ``run``.

        The backoff is an ``asyncio.sleep`` suspension; cancelling the task
        during the wait cancels the whole retry loop.
        """
        schedule = backoff_schedule(policy)
        attempt = 0
        while True:
            attempt += 1
            try:
                return await operation()
            except Exception:
                if attempt >= policy.max_retries:
                    raise
            _, delay_ms = next(schedule)
            _log_retry(delay_ms, attempt)
            await self.async_sleep(delay_ms)


def retry_strategy(
    policy: RetryPolicy, executor: RetryExecutor | None = None
) -> Callable[[Callable[[], T]], T]:
    """
    Return a function that runs any no-argument callable under ``policy``.

    >>> with_retries = retry_strategy(RetryPolicy(max_retries=3))
    >>> with_retries(lambda: 42)
    42
    """
    executor = executor or RetryExecutor()

    def _execute(operation: Callable[[], T]) -> T:
        return executor.run(policy, operation)

    return _execute
