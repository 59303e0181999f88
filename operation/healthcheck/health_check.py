"""
Health check framework for PrivScore components.
"""

from enum import Enum
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field
from datetime import datetime
from abc import ABC, abstractmethod


class HealthStatus(Enum):
    """Health status enumeration"""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass
class HealthCheckResult:
    """Result of a health check"""
    status: HealthStatus
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)
    response_time_ms: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(timespec="seconds"),
            "response_time_ms": self.response_time_ms,
        }


class HealthCheck(ABC):
    """Base class for health checks"""

    @abstractmethod
    def check(self) -> HealthCheckResult:
        """Perform health check"""

    @abstractmethod
    def get_name(self) -> str:
        """Get health check name"""


class CompositeHealthCheck:
    """Runs several health checks and combines their status"""

    def __init__(self, checks: List[HealthCheck]):
        self.checks = checks

    def check_all(self) -> Dict[str, HealthCheckResult]:
        """
        Run all health checks. A check that raises is reported as unhealthy.

        Returns:
            Dictionary mapping check names to results
        """
        results = {}
        for check in self.checks:
            try:
                results[check.get_name()] = check.check()
            except Exception as e:
                results[check.get_name()] = HealthCheckResult(
                    status=HealthStatus.UNHEALTHY,
                    message=f"Health check failed: {e}",
                    details={"error": str(e)},
                )
        return results

    @staticmethod
    def overall_status(results: Dict[str, HealthCheckResult]) -> HealthStatus:
        """Worst status among the results; unhealthy when there are none."""
        if not results:
            return HealthStatus.UNHEALTHY
        statuses = [result.status for result in results.values()]
        if HealthStatus.UNHEALTHY in statuses:
            return HealthStatus.UNHEALTHY
        if HealthStatus.DEGRADED in statuses:
            return HealthStatus.DEGRADED
        return HealthStatus.HEALTHY

    def get_overall_status(self) -> HealthStatus:
        return self.overall_status(self.check_all())
