# advice/transport.py
"""
Transports to the remote text-generation provider.

``ProxyTransport`` posts ``{model, inputs, parameters}`` to the same-origin
proxy, which attaches the server-held credential. ``DirectTransport`` calls
the provider's per-model inference path with a client-held bearer token.
Both return the provider-shaped response body and raise ``TransportError``
for network failures, non-success statuses and malformed bodies.
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Protocol

import requests

from advice.config import AdviceConfig
from advice.errors import TransportError, NotConfigured
from operation.logging import get_logger

logger = get_logger(__name__)

USER_AGENT = "PrivScore/1.0"


class InferenceTransport(Protocol):
    mode: str

    def generate(self, model: str, inputs: str, parameters: Optional[Dict[str, Any]] = None) -> Any:
        ...


def provider_model_url(provider_url: str, model: str) -> str:
    return f"{provider_url.rstrip('/')}/{model}"


def post_inference(
    provider_url: str,
    model: str,
    inputs: str,
    parameters: Optional[Dict[str, Any]],
    api_key: str,
    timeout: float,
) -> requests.Response:
    """
    POST ``{inputs, parameters}`` to the provider for one model.

    Shared by the direct transport and the proxy server. Network errors
    propagate as ``requests.RequestException``.
    """
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }
    return requests.post(
        provider_model_url(provider_url, model),
        json={"inputs": inputs, "parameters": parameters or {}},
        headers=headers,
        timeout=timeout,
    )


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason or "no details"
    if isinstance(body, dict):
        return str(body.get("error") or body.get("details") or body)[:200]
    return str(body)[:200]


def _checked_payload(data: Any, model: str, source: str) -> Any:
    """Reject a missing payload or a provider error object returned with a success status."""
    if data is None:
        raise TransportError(f"{source} returned no data", model=model)
    if isinstance(data, dict) and "error" in data and not (data.get("generated_text") or data.get("text")):
        raise TransportError(f"{source} returned an error body: {str(data['error'])[:200]}", model=model)
    return data


class ProxyTransport:
    """Calls the same-origin proxy endpoint."""

    mode = "proxy"

    def __init__(self, proxy_url: str, timeout: float):
        self.proxy_url = proxy_url
        self.timeout = timeout

    def generate(self, model: str, inputs: str, parameters: Optional[Dict[str, Any]] = None) -> Any:
        payload = {"model": model, "inputs": inputs, "parameters": parameters or {}}
        try:
            response = requests.post(self.proxy_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Proxy request failed: {e}", model=model) from e

        if not response.ok:
            raise TransportError(
                f"Proxy returned {response.status_code}: {_error_message(response)}",
                model=model,
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError("Proxy returned a non-JSON body", model=model) from e

        if not isinstance(body, dict) or not body.get("success"):
            error = body.get("error") if isinstance(body, dict) else None
            raise TransportError(f"Proxy call unsuccessful: {error or 'malformed body'}", model=model)
        return _checked_payload(body.get("data"), model, "Proxy")


class DirectTransport:
    """Calls the provider directly with a client-held key."""

    mode = "direct"

    def __init__(self, provider_url: str, api_key: str, timeout: float):
        self.provider_url = provider_url
        self.api_key = api_key
        self.timeout = timeout

    def generate(self, model: str, inputs: str, parameters: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = post_inference(
                self.provider_url, model, inputs, parameters, self.api_key, self.timeout
            )
        except requests.RequestException as e:
            raise TransportError(f"Provider request failed: {e}", model=model) from e

        if not response.ok:
            raise TransportError(
                f"Provider returned {response.status_code}: {_error_message(response)}",
                model=model,
                status_code=response.status_code,
            )
        try:
            body = response.json()
        except ValueError as e:
            raise TransportError("Provider returned a non-JSON body", model=model) from e
        return _checked_payload(body, model, "Provider")


def build_transport(config: AdviceConfig) -> InferenceTransport:
    """
    Transport for the given configuration.

    Raises:
        NotConfigured: AI disabled, or no proxy URL / client key for the mode
    """
    if not config.enabled:
        raise NotConfigured(f"No usable transport (ai_enabled={config.ai_enabled}, mode={config.mode})")
    if config.use_proxy:
        return ProxyTransport(config.proxy_url, config.timeout)
    return DirectTransport(config.provider_url, config.api_key or "", config.timeout)
