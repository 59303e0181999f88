"""
Retry helpers for remote inference calls.

``retry_with_backoff`` retries one operation with a backoff delay;
``attempt_candidates`` walks an ordered list of alternatives (e.g. model
names), short-circuiting on the first success.
"""

import time
import random
import functools
from typing import Callable, Type, Tuple, Optional, Any, Iterable, List, TypeVar
from enum import Enum
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")
C = TypeVar("C")


class RetryStrategy(Enum):
    EXPONENTIAL = "exponential"
    LINEAR = "linear"
    FIXED = "fixed"


class AllCandidatesFailed(Exception):
    """Every candidate failed; ``errors`` holds (candidate, exception) pairs in attempt order."""

    def __init__(self, errors: List[Tuple[Any, Exception]]):
        self.errors = errors
        tried = ", ".join(str(candidate) for candidate, _ in errors) or "none"
        super().__init__(f"All {len(errors)} candidates failed (tried: {tried})")

    @property
    def last_error(self) -> Optional[Exception]:
        return self.errors[-1][1] if self.errors else None


def calculate_backoff(
    attempt: int,
    initial_delay: float,
    max_delay: float,
    multiplier: float,
    jitter: bool = True,
    strategy: RetryStrategy = RetryStrategy.EXPONENTIAL
) -> float:
    """
    Calculate backoff delay for given attempt.

    Args:
        attempt: Current attempt number (1-indexed)
        initial_delay: Initial delay in seconds
        max_delay: Maximum delay in seconds
        multiplier: Backoff multiplier
        jitter: Add up to 25% random jitter
        strategy: Retry strategy (exponential, linear, fixed)

    Returns:
        Delay in seconds
    """
    if strategy == RetryStrategy.EXPONENTIAL:
        delay = initial_delay * (multiplier ** (attempt - 1))
    elif strategy == RetryStrategy.LINEAR:
        delay = initial_delay * attempt
    else:  # FIXED
        delay = initial_delay

    delay = min(delay, max_delay)

    if jitter:
        delay = delay + delay * 0.25 * random.random()

    return delay


def retry_with_backoff(
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    multiplier: float = 2.0,
    jitter: bool = True,
    retryable_exceptions: Tuple[Type[Exception], ...] = (Exception,),
    on_retry: Optional[Callable] = None,
    strategy: RetryStrategy = RetryStrategy.EXPONENTIAL,
    sleep: Callable[[float], None] = time.sleep,
):
    """
    Decorator for retrying functions with backoff.

    With ``max_attempts=1`` the function runs exactly once and its exception
    propagates unchanged.

    Args:
        max_attempts: Maximum number of attempts (>= 1)
        initial_delay: Initial delay in seconds
        max_delay: Maximum delay in seconds
        multiplier: Backoff multiplier
        jitter: Add random jitter
        retryable_exceptions: Tuple of exception types to retry
        on_retry: Optional callback ``(attempt, delay, exc)`` called before each retry
        strategy: Retry strategy (exponential, linear, fixed)
        sleep: Sleep function, replaceable in tests
    """
    max_attempts = max(1, max_attempts)

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except retryable_exceptions as e:
                    if attempt >= max_attempts:
                        if max_attempts > 1:
                            logger.warning(
                                f"{func.__name__} failed after {max_attempts} attempts: {e}"
                            )
                        raise

                    delay = calculate_backoff(
                        attempt, initial_delay, max_delay, multiplier, jitter, strategy
                    )
                    logger.info(
                        f"{func.__name__} failed (attempt {attempt}/{max_attempts}): {e}. "
                        f"Retrying in {delay:.2f}s..."
                    )
                    if on_retry:
                        on_retry(attempt, delay, e)
                    sleep(delay)

        return wrapper
    return decorator


def retry_from_config(config, sleep: Callable[[float], None] = time.sleep):
    """Build a ``retry_with_backoff`` decorator from a RetryConfig."""
    return retry_with_backoff(
        max_attempts=config.max_attempts,
        initial_delay=config.initial_delay,
        max_delay=config.max_delay,
        multiplier=config.multiplier,
        jitter=config.jitter,
        retryable_exceptions=config.retryable_exceptions,
        strategy=config.strategy,
        sleep=sleep,
    )


def attempt_candidates(
    candidates: Iterable[C],
    operation: Callable[[C], T],
    retryable: Tuple[Type[Exception], ...] = (Exception,),
) -> T:
    """
    Try ``operation`` on each candidate in order and return the first success.

    Candidates are attempted sequentially; a candidate is only tried after the
    previous one raised one of ``retryable``. Any other exception propagates
    immediately.

    Args:
        candidates: Ordered alternatives (e.g. model names)
        operation: Single-attempt callable taking one candidate
        retryable: Exception types that move on to the next candidate

    Returns:
        Result of the first successful attempt

    Raises:
        AllCandidatesFailed: if every candidate failed (or there were none)
    """
    errors: List[Tuple[Any, Exception]] = []
    for candidate in candidates:
        try:
            return operation(candidate)
        except retryable as e:
            logger.debug(f"Candidate {candidate} failed: {e}")
            errors.append((candidate, e))
    raise AllCandidatesFailed(errors)
