"""Runs transport-independent MCPMiddleware checks on HTTP requests.

The API key is read from ``X-API-Key`` or, failing that, from an
``Authorization: Bearer <key>`` header. Rejections become JSON responses:
401 for authentication, 429 with ``Retry-After`` for rate limits.
"""

import math
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from terminal_mcp.middleware.base import MCPMiddleware
from terminal_mcp.middleware.ratelimit import RateLimitError

# Paths that skip every check
UNGUARDED_PATHS = frozenset({"/health"})


def client_ip(request: Request, trust_forwarded: bool = False) -> str:
    """Client address of the connection.

    ``X-Forwarded-For`` is client-controlled, so its first hop is only used
    when ``trust_forwarded`` is set for a server behind a reverse proxy.
    """
    forwarded = request.headers.get("X-Forwarded-For") if trust_forwarded else None
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


def api_key(request: Request) -> str | None:
    key = request.headers.get("X-API-Key")
    if key:
        return key

    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return None


def request_context(request: Request, trust_forwarded: bool = False) -> dict[str, Any]:
    return {
        "client_ip": client_ip(request, trust_forwarded),
        "api_key": api_key(request),
        "method": request.method,
        "path": request.url.path,
    }


def rejection(error: PermissionError) -> JSONResponse:
    """Map a rejected check to its HTTP response."""
    if isinstance(error, RateLimitError):
        return JSONResponse(
            status_code=429,
            content={"error": str(error)},
            headers={"Retry-After": str(max(1, math.ceil(error.retry_after)))},
        )
    return JSONResponse(status_code=401, content={"error": str(error)})


class HTTPMiddlewareAdapter(BaseHTTPMiddleware):
    """Starlette middleware wrapping one MCPMiddleware."""

    def __init__(
        self,
        app: Any,
        mcp_middleware: MCPMiddleware,
        trust_forwarded: bool = False,
    ) -> None:
        super().__init__(app)
        self.mcp_middleware = mcp_middleware
        self.trust_forwarded = trust_forwarded

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        if request.url.path in UNGUARDED_PATHS:
            return await call_next(request)

        try:
            await self.mcp_middleware.process_request(
                method="http",
                params={},
                context=request_context(request, self.trust_forwarded),
            )
        except PermissionError as e:
            return rejection(e)

        return await call_next(request)
