"""
Retry configuration for remote inference calls.
"""

from dataclasses import dataclass
from typing import Tuple, Type
import os

from .retry import RetryStrategy


@dataclass
class RetryConfig:
    """Configuration for retry behavior"""
    max_attempts: int
    initial_delay: float
    max_delay: float
    multiplier: float
    jitter: bool
    retryable_exceptions: Tuple[Type[Exception], ...]
    strategy: RetryStrategy = RetryStrategy.EXPONENTIAL


def inference_retry_config(retryable_exceptions: Tuple[Type[Exception], ...] = (Exception,)) -> RetryConfig:
    """
    Per-model retry settings, read from the environment at call time.

    The default of one attempt per model means a failing model immediately
    hands over to the next candidate.
    """
    return RetryConfig(
        max_attempts=int(os.getenv("PRIVSCORE_RETRIES_PER_MODEL", "1")),
        initial_delay=float(os.getenv("PRIVSCORE_RETRY_INITIAL_DELAY", "0.5")),
        max_delay=float(os.getenv("PRIVSCORE_RETRY_MAX_DELAY", "4.0")),
        multiplier=2.0,
        jitter=True,
        retryable_exceptions=retryable_exceptions,
        strategy=RetryStrategy.EXPONENTIAL,
    )
