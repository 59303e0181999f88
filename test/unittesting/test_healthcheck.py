"""
Unit tests for operation/healthcheck
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import unittest
from types import SimpleNamespace

from operation.healthcheck import (
    CompositeHealthCheck,
    CredentialHealthCheck,
    HealthCheck,
    HealthStatus,
    InferenceHealthCheck,
)


class FakeService:
    def __init__(self, enabled=True, success=True, time_ms=100.0):
        self.enabled = enabled
        self.config = SimpleNamespace(mode="proxy")
        self.result = {"mode": "proxy", "success": success, "message": "msg", "time_ms": time_ms}

    def test_connection(self):
        return self.result


class BrokenCheck(HealthCheck):
    def get_name(self):
        return "broken"

    def check(self):
        raise RuntimeError("exploded")


class TestHealthChecks(unittest.TestCase):
    """Test cases for health checks."""

    def test_inference_statuses(self):
        cases = [
            (FakeService(), HealthStatus.HEALTHY),
            (FakeService(enabled=False), HealthStatus.DEGRADED),
            (FakeService(success=False), HealthStatus.UNHEALTHY),
            (FakeService(time_ms=9000.0), HealthStatus.DEGRADED),
        ]
        for service, status in cases:
            with self.subTest(status=status):
                self.assertEqual(InferenceHealthCheck(service).check().status, status)

    def test_credential(self):
        self.assertEqual(CredentialHealthCheck("key").check().status, HealthStatus.HEALTHY)
        self.assertEqual(CredentialHealthCheck(None).check().status, HealthStatus.DEGRADED)

    def test_composite(self):
        """Overall status is the worst of the results; a raising check is unhealthy."""
        composite = CompositeHealthCheck([CredentialHealthCheck("key"), CredentialHealthCheck(None)])
        self.assertEqual(composite.get_overall_status(), HealthStatus.DEGRADED)

        results = CompositeHealthCheck([BrokenCheck()]).check_all()
        self.assertEqual(results["broken"].status, HealthStatus.UNHEALTHY)
        self.assertEqual(CompositeHealthCheck.overall_status({}), HealthStatus.UNHEALTHY)

    def test_to_dict(self):
        data = CredentialHealthCheck("key").check().to_dict()
        self.assertEqual(data["status"], "healthy")
        self.assertIn("timestamp", data)


if __name__ == '__main__':
    unittest.main()
