# retry package
from .retry import (
    retry_with_backoff,
    retry_from_config,
    attempt_candidates,
    AllCandidatesFailed,
    RetryStrategy,
    calculate_backoff,
)
from .retry_config import RetryConfig, inference_retry_config

__all__ = [
    'retry_with_backoff',
    'retry_from_config',
    'attempt_candidates',
    'AllCandidatesFailed',
    'RetryStrategy',
    'calculate_backoff',
    'RetryConfig',
    'inference_retry_config'
]
