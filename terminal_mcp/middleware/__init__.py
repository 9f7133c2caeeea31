"""Terminal MCP middleware components."""

from terminal_mcp.middleware.auth import APIKeyMiddleware
from terminal_mcp.middleware.base import MCPMiddleware, TerminalMiddleware
from terminal_mcp.middleware.errors import ErrorHandlingMiddleware
from terminal_mcp.middleware.http_adapter import HTTPMiddlewareAdapter
from terminal_mcp.middleware.logging import LoggingMiddleware
from terminal_mcp.middleware.ratelimit import (
    RateLimitError,
    RateLimitMiddleware,
    TokenBucket,
)

__all__ = [
    "APIKeyMiddleware",
    "ErrorHandlingMiddleware",
    "HTTPMiddlewareAdapter",
    "LoggingMiddleware",
    "MCPMiddleware",
    "RateLimitError",
    "RateLimitMiddleware",
    "TerminalMiddleware",
    "TokenBucket",
]
