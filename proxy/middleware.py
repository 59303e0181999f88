# proxy/middleware.py
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi import Request

from operation.logging import set_correlation_id

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
}


class RequestContext(BaseHTTPMiddleware):
    """Correlation id per request (X-Request-ID honoured) plus security headers."""

    async def dispatch(self, request: Request, call_next):
        cid = set_correlation_id(request.headers.get("X-Request-ID") or None)
        response = await call_next(request)
        response.headers["X-Request-ID"] = cid
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
