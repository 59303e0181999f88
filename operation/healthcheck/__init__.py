# healthcheck package
from .health_check import (
    HealthCheck,
    HealthCheckResult,
    HealthStatus,
    CompositeHealthCheck
)
from .inference_check import InferenceHealthCheck, CredentialHealthCheck

__all__ = [
    'HealthCheck',
    'HealthCheckResult',
    'HealthStatus',
    'CompositeHealthCheck',
    'InferenceHealthCheck',
    'CredentialHealthCheck'
]
