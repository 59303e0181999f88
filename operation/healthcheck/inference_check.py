"""
Inference provider health checks.
"""

from typing import Optional

from operation.healthcheck.health_check import HealthCheck, HealthCheckResult, HealthStatus

# Connection tests slower than this are reported as degraded
SLOW_RESPONSE_MS = 5000


class InferenceHealthCheck(HealthCheck):
    """Runs the advice service's connection test through its configured transport"""

    def __init__(self, service):
        """
        Args:
            service: AdviceService whose transport is tested
        """
        self.service = service

    def get_name(self) -> str:
        return "inference"

    def check(self) -> HealthCheckResult:
        if not self.service.enabled:
            return HealthCheckResult(
                status=HealthStatus.DEGRADED,
                message="AI features not configured; expert fallback in use",
                details={"mode": self.service.config.mode, "configured": False},
            )

        result = self.service.test_connection()
        details = {"mode": result["mode"], "configured": True}
        if not result["success"]:
            return HealthCheckResult(
                status=HealthStatus.UNHEALTHY,
                message=result["message"],
                details=details,
                response_time_ms=result["time_ms"],
            )
        if result["time_ms"] > SLOW_RESPONSE_MS:
            return HealthCheckResult(
                status=HealthStatus.DEGRADED,
                message="Inference provider is slow",
                details=details,
                response_time_ms=result["time_ms"],
            )
        return HealthCheckResult(
            status=HealthStatus.HEALTHY,
            message="Inference provider is available",
            details=details,
            response_time_ms=result["time_ms"],
        )


class CredentialHealthCheck(HealthCheck):
    """Reports whether the proxy holds a provider credential (no network call)"""

    def __init__(self, api_key: Optional[str]):
        self.api_key = api_key

    def get_name(self) -> str:
        return "credential"

    def check(self) -> HealthCheckResult:
        if self.api_key:
            return HealthCheckResult(
                status=HealthStatus.HEALTHY,
                message="Provider credential configured",
                details={"configured": True},
            )
        return HealthCheckResult(
            status=HealthStatus.DEGRADED,
            message="No provider credential; clients will use expert fallback",
            details={"configured": False},
        )
