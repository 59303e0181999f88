"""
Unit tests for proxy/server.py
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import json
import unittest
from unittest import mock

import requests
from fastapi.testclient import TestClient

from advice.errors import InputValidationError
from proxy import create_app, ProxySettings, parse_proxy_request
from proxy.server import PROXY_PATH

VALID_BODY = {"model": "gpt2", "inputs": "Why use 2FA?", "parameters": {"max_length": 50}}


def _upstream(status_code=200, body=None, text=""):
    response = mock.MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


class TestProxyServer(unittest.TestCase):
    """Test cases for the inference proxy."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = TestClient(create_app(ProxySettings(api_key="server-key", max_body=1024)))

    def test_method_not_allowed(self):
        response = self.client.get(PROXY_PATH)
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.json(), {"error": "Method not allowed"})

    def test_options(self):
        response = self.client.options(PROXY_PATH)
        self.assertEqual(response.status_code, 200)

    def test_preflight_any_origin(self):
        """The default origin list answers preflight for any origin."""
        response = self.client.options(PROXY_PATH, headers={
            "Origin": "https://anywhere.example",
            "Access-Control-Request-Method": "POST",
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["access-control-allow-origin"], "*")

    def test_restricted_origins(self):
        """Only configured origins get an Access-Control-Allow-Origin header."""
        client = TestClient(create_app(ProxySettings(cors_origins=["https://privscore.example"])))

        denied = client.post(PROXY_PATH, json=VALID_BODY, headers={"Origin": "https://evil.example"})
        self.assertEqual(denied.status_code, 503)
        self.assertNotEqual(denied.headers.get("access-control-allow-origin"), "*")
        self.assertNotIn("access-control-allow-origin", denied.headers)

        allowed = client.post(PROXY_PATH, json=VALID_BODY, headers={"Origin": "https://privscore.example"})
        self.assertEqual(allowed.headers["access-control-allow-origin"], "https://privscore.example")

        preflight = client.options(PROXY_PATH, headers={
            "Origin": "https://evil.example",
            "Access-Control-Request-Method": "POST",
        })
        self.assertEqual(preflight.status_code, 400)
        self.assertNotIn("access-control-allow-origin", preflight.headers)

    def test_invalid_json(self):
        response = self.client.post(PROXY_PATH, content=b"not json",
                                    headers={"Content-Type": "application/json"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid JSON body")

    def test_missing_fields(self):
        response = self.client.post(PROXY_PATH, json={"model": "gpt2"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Missing required fields: model and inputs")

    def test_body_too_large(self):
        body = dict(VALID_BODY, inputs="x" * 2048)
        response = self.client.post(PROXY_PATH, json=body)
        self.assertEqual(response.status_code, 413)

    @mock.patch("proxy.server.post_inference")
    def test_not_configured(self, post_inference):
        """No server credential: 503 with a fallback hint and no upstream call."""
        client = TestClient(create_app(ProxySettings(api_key=None)))
        response = client.post(PROXY_PATH, json=VALID_BODY)
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json(), {"error": "AI service not configured", "fallback": True})
        post_inference.assert_not_called()

    @mock.patch("proxy.server.post_inference")
    def test_success(self, post_inference):
        post_inference.return_value = _upstream(body=[{"generated_text": "Because."}])
        response = self.client.post(PROXY_PATH, json=VALID_BODY)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["data"], [{"generated_text": "Because."}])
        self.assertEqual(body["model"], "gpt2")
        self.assertIn("timestamp", body)

        args = post_inference.call_args[0]
        self.assertEqual(args[1], "gpt2")
        self.assertEqual(args[2], "Why use 2FA?")
        self.assertEqual(args[3], {"max_length": 50})
        self.assertEqual(args[4], "server-key")

    @mock.patch("proxy.server.post_inference")
    def test_upstream_status_echoed(self, post_inference):
        """Upstream error statuses pass through."""
        post_inference.return_value = _upstream(503, text="Model is loading")
        response = self.client.post(PROXY_PATH, json=VALID_BODY)
        self.assertEqual(response.status_code, 503)
        body = response.json()
        self.assertEqual(body["error"], "Inference API error: 503")
        self.assertEqual(body["details"], "Model is loading")
        self.assertTrue(body["fallback"])

    @mock.patch("proxy.server.post_inference")
    def test_upstream_unreachable(self, post_inference):
        post_inference.side_effect = requests.ConnectionError("refused")
        response = self.client.post(PROXY_PATH, json=VALID_BODY)
        self.assertEqual(response.status_code, 502)
        self.assertTrue(response.json()["fallback"])

    @mock.patch("proxy.server.post_inference")
    def test_upstream_non_json(self, post_inference):
        post_inference.return_value = _upstream(body=ValueError("no json"), text="<html>")
        response = self.client.post(PROXY_PATH, json=VALID_BODY)
        self.assertEqual(response.status_code, 502)

    def test_request_id_and_security_headers(self):
        response = self.client.get(PROXY_PATH, headers={"X-Request-ID": "abc-123"})
        self.assertEqual(response.headers["x-request-id"], "abc-123")
        self.assertEqual(response.headers["x-content-type-options"], "nosniff")

    def test_healthz(self):
        response = self.client.get("/healthz")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

        client = TestClient(create_app(ProxySettings(api_key=None)))
        self.assertEqual(client.get("/healthz").json()["status"], "degraded")


class TestParseProxyRequest(unittest.TestCase):
    """Test cases for request validation."""

    def test_valid(self):
        request = parse_proxy_request(json.dumps({"model": "gpt2", "inputs": "hi"}).encode(), 1024)
        self.assertEqual(request.model, "gpt2")
        self.assertEqual(request.parameters, {})

    def test_invalid(self):
        cases = [
            (b"x" * 20, 10, 413),
            (b"{", 1024, 400),
            (b"[]", 1024, 400),
            (b"", 1024, 400),
            (b'{"model": "gpt2", "inputs": 5}', 1024, 400),
            (b'{"model": "gpt2", "inputs": "hi", "parameters": "bad"}', 1024, 400),
        ]
        for body, max_body, status in cases:
            with self.subTest(body=body):
                with self.assertRaises(InputValidationError) as ctx:
                    parse_proxy_request(body, max_body)
                self.assertEqual(ctx.exception.status_code, status)


if __name__ == '__main__':
    unittest.main()
