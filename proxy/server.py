# proxy/server.py
"""
Same-origin inference proxy.

Accepts ``{model, inputs, parameters}`` from the PrivScore front-ends,
attaches the server-held provider credential and forwards the call. Errors
come back as structured JSON with an explicit status code so the client can
decide to fall back; ``fallback: true`` marks errors where it should.

Run with ``python -m proxy.server``.
"""

from __future__ import annotations
import json
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests
import uvicorn
from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field, ValidationError
from starlette.concurrency import run_in_threadpool

from advice.config import DEFAULT_PROVIDER_URL, DEFAULT_TIMEOUT
from advice.errors import InputValidationError
from advice.transport import post_inference
from operation.healthcheck import CompositeHealthCheck, CredentialHealthCheck
from operation.logging import get_logger, setup_logging_from_env
from operation.monitoring.metrics import get_metrics_registry, PROXY_REQUESTS, PROXY_UPSTREAM_ERRORS
from operation.monitoring.performance import performance_timer
from proxy.middleware import RequestContext

logger = get_logger(__name__)

PROXY_PATH = "/api/ai-proxy"
DEFAULT_MAX_BODY = 1024 * 1024  # 1 MiB

@dataclass(frozen=True)
class ProxySettings:
    api_key: Optional[str] = field(default=None, repr=False)
    provider_url: str = DEFAULT_PROVIDER_URL
    max_body: int = DEFAULT_MAX_BODY
    timeout: float = DEFAULT_TIMEOUT
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "ProxySettings":
        origins = os.getenv("PRIVSCORE_CORS_ORIGINS", "*")
        return cls(
            api_key=os.getenv("HUGGING_FACE_API_KEY") or None,
            provider_url=os.getenv("PRIVSCORE_PROVIDER_URL", DEFAULT_PROVIDER_URL),
            max_body=int(os.getenv("PRIVSCORE_PROXY_MAX_BODY", str(DEFAULT_MAX_BODY))),
            timeout=float(os.getenv("PRIVSCORE_AI_TIMEOUT", str(DEFAULT_TIMEOUT))),
            host=os.getenv("PRIVSCORE_PROXY_HOST", "127.0.0.1"),
            port=int(os.getenv("PRIVSCORE_PROXY_PORT", "8000")),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )


class ProxyRequest(BaseModel):
    model: str = Field(min_length=1)
    inputs: str = Field(min_length=1)
    parameters: Dict[str, Any] = Field(default_factory=dict)


def _error(status_code: int, error: str, **extra: Any) -> JSONResponse:
    return JSONResponse({"error": error, **extra}, status_code=status_code)


def parse_proxy_request(body: bytes, max_body: int) -> ProxyRequest:
    """
    Validate a raw request body.

    Raises:
        InputValidationError: 413 when over ``max_body``, 400 otherwise
    """
    if len(body) > max_body:
        raise InputValidationError(f"Request body exceeds {max_body} bytes", status_code=413)
    try:
        payload = json.loads(body or b"null")
    except ValueError:
        raise InputValidationError("Invalid JSON body")
    if not isinstance(payload, dict) or not payload.get("model") or not payload.get("inputs"):
        raise InputValidationError("Missing required fields: model and inputs")
    try:
        return ProxyRequest.model_validate(payload)
    except ValidationError as e:
        raise InputValidationError(f"Invalid request: {e.error_count()} validation error(s)") from e


def build_router(settings: ProxySettings) -> APIRouter:
    router = APIRouter()
    registry = get_metrics_registry()

    @router.api_route(PROXY_PATH, methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    async def ai_proxy(request: Request):
        if request.method == "OPTIONS":
            return Response(status_code=200)
        if request.method != "POST":
            return JSONResponse(
                {"error": "Method not allowed"},
                status_code=405,
                headers={"Allow": "POST, OPTIONS"},
            )

        registry.counter(PROXY_REQUESTS).inc()

        declared = request.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > settings.max_body:
            return _error(413, f"Request body exceeds {settings.max_body} bytes")

        try:
            proxy_request = parse_proxy_request(await request.body(), settings.max_body)
        except InputValidationError as e:
            logger.info(f"Rejected proxy request: {e}")
            return _error(e.status_code, str(e))

        if not settings.api_key:
            logger.warning("Proxy called without a provider credential configured")
            return _error(503, "AI service not configured", fallback=True)

        model = proxy_request.model
        logger.debug(f"Forwarding inference request for model {model}")
        try:
            with performance_timer(f"proxy.{model}"):
                upstream = await run_in_threadpool(
                    post_inference,
                    settings.provider_url,
                    model,
                    proxy_request.inputs,
                    proxy_request.parameters,
                    settings.api_key,
                    settings.timeout,
                )
        except requests.RequestException as e:
            registry.counter(PROXY_UPSTREAM_ERRORS).inc()
            logger.warning(f"Upstream request for {model} failed: {e}")
            return _error(502, "Upstream request failed", details=str(e), fallback=True)

        if not upstream.ok:
            registry.counter(PROXY_UPSTREAM_ERRORS).inc()
            logger.warning(f"Upstream returned {upstream.status_code} for {model}")
            return _error(
                upstream.status_code,
                f"Inference API error: {upstream.status_code}",
                details=upstream.text[:500],
                fallback=True,
            )

        try:
            data = upstream.json()
        except ValueError:
            registry.counter(PROXY_UPSTREAM_ERRORS).inc()
            return _error(502, "Upstream returned a non-JSON body", fallback=True)

        return JSONResponse(
            {
                "success": True,
                "data": data,
                "model": model,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        )

    @router.get("/healthz")
    def healthz():
        results = CompositeHealthCheck([CredentialHealthCheck(settings.api_key)]).check_all()
        return {
            "status": CompositeHealthCheck.overall_status(results).value,
            "checks": {name: result.to_dict() for name, result in results.items()},
        }

    return router


def create_app(settings: Optional[ProxySettings] = None) -> FastAPI:
    settings = settings or ProxySettings.from_env()

    app = FastAPI(title="PrivScore AI Proxy")
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )
    app.add_middleware(RequestContext)
    app.include_router(build_router(settings))
    return app


def main() -> None:
    load_dotenv()
    setup_logging_from_env()
    settings = ProxySettings.from_env()
    logger.info(
        f"Starting proxy on {settings.host}:{settings.port} "
        f"(credential configured: {bool(settings.api_key)})"
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
