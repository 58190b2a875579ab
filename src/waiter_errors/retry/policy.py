"""
Retry policy.

This module defines the immutable RetryPolicy that parameterizes the
exponential backoff applied by RetryExecutor. A policy is constructed
per call site and can be shared freely since it carries no state.
"""

from pydantic import BaseModel, ConfigDict, Field


class RetryPolicy(BaseModel):
    """
    Bounded exponential backoff parameters.

    Attributes:
        delay_multiplier: Factor applied to the running delay after each retry
        initial_delay_ms: Delay before the first retry (ms)
        max_delay_ms: Cap applied to each individual sleep (ms)
        max_retries: Total number of invocations allowed, including the first
    """

    model_config = ConfigDict(frozen=True)

    delay_multiplier: float = Field(default=1.0, ge=1.0)
    initial_delay_ms: int = Field(default=100, ge=0)
    max_delay_ms: int = Field(default=300000, ge=0)  # 5 minutes
    max_retries: int = Field(default=10, ge=1)
