"""Terminal MCP FastMCP server.

Thin wiring of tools, resources and middleware. Business logic lives in
tools/, resources/ and services/.

Every client that can call the tools can run arbitrary shell commands on
this host with this process's privileges.
"""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from terminal_mcp.config import Settings
from terminal_mcp.middleware import (
    APIKeyMiddleware,
    ErrorHandlingMiddleware,
    HTTPMiddlewareAdapter,
    LoggingMiddleware,
    RateLimitMiddleware,
)
from terminal_mcp.resources import (
    list_sessions_resource,
    session_cwd_resource,
    session_history_resource,
    session_stats_resource,
)
from terminal_mcp.services import get_config, get_registry
from terminal_mcp.tools import execute_command, run, terminal
from terminal_mcp.utils.console import MCPRequestFormatter
from terminal_mcp.utils.shell import select_interpreter


NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "httpcore",
    "fastmcp",
    "starlette",
    "anyio",
)


def configure_logging(settings: Settings) -> None:
    """Route terminal_mcp logs to stderr through MCPRequestFormatter.

    stdout stays clean for the stdio transport. Colors are used only when
    enabled and stderr is a terminal.
    """
    package_logger = logging.getLogger("terminal_mcp")
    package_logger.setLevel(settings.log_level)

    if not package_logger.handlers:
        use_colors = settings.log_colors and sys.stderr.isatty()
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(MCPRequestFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# Configured at import so every entry point logs the same way
configure_logging(Settings.from_env())

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Announce the execution capability at startup and drop sessions at shutdown."""
    interpreter = select_interpreter()
    registry = get_registry()

    logger.warning(
        "Shell execution enabled: clients can run arbitrary commands via '%s %s' "
        "with the privileges of this process",
        interpreter.path,
        interpreter.flag,
    )
    logger.info("Terminal MCP server ready to accept connections")

    try:
        yield {"interpreter": interpreter.path, "flag": interpreter.flag}
    finally:
        logger.info("Terminal MCP server shutting down")
        await registry.clear()
        logger.info("Terminal MCP server shutdown complete")


def configure_middleware(server: FastMCP, settings: Settings) -> None:
    """Add MCP-layer middleware: ErrorHandling (outermost) wrapping Logging.

    Args:
        server: The FastMCP server to configure.
        settings: Logging options (payloads, slow threshold, tracebacks).
    """
    server.add_middleware(
        ErrorHandlingMiddleware(include_traceback=settings.include_traceback)
    )
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=settings.log_payloads,
            slow_threshold_ms=float(settings.slow_threshold_ms),
        )
    )


def build_http_middleware(settings: Settings) -> list[Middleware]:
    """Build the Starlette middleware stack for the HTTP transport.

    Rate limiting is on unless TERMINAL_RATE_LIMIT_PER_MINUTE=0. API key
    auth is on whenever TERMINAL_API_KEYS is set, unless
    TERMINAL_AUTH_ENABLED=false. Clients are keyed by socket address unless
    TERMINAL_TRUST_FORWARDED_FOR=true.

    Returns:
        Middleware list for ``FastMCP.run(..., middleware=...)`` or
        ``FastMCP.http_app(middleware=...)``
    """
    middleware: list[Middleware] = []

    if settings.rate_limit_per_minute > 0:
        rate_limit = RateLimitMiddleware(
            per_minute=settings.rate_limit_per_minute,
            burst=settings.rate_limit_burst,
        )
        middleware.append(
            Middleware(
                HTTPMiddlewareAdapter,
                mcp_middleware=rate_limit,
                trust_forwarded=settings.trust_forwarded_for,
            )
        )
        logger.info(
            "Rate limiting configured: %d req/min, burst=%d",
            settings.rate_limit_per_minute,
            settings.rate_limit_burst,
        )
    else:
        logger.info("Rate limiting disabled (TERMINAL_RATE_LIMIT_PER_MINUTE=0)")

    if settings.api_keys:
        auth = APIKeyMiddleware(api_keys=settings.api_keys, enabled=settings.auth_enabled)
        middleware.append(
            Middleware(
                HTTPMiddlewareAdapter,
                mcp_middleware=auth,
                trust_forwarded=settings.trust_forwarded_for,
            )
        )
        if settings.auth_enabled:
            logger.info(
                "API key authentication enabled (%d key(s) configured)",
                len(settings.api_keys),
            )
        else:
            logger.warning(
                "API key authentication DISABLED via TERMINAL_AUTH_ENABLED=false"
            )
    else:
        logger.warning(
            "No API keys configured (TERMINAL_API_KEYS not set). "
            "Any client that reaches this server can run shell commands!"
        )

    return middleware


def create_server() -> FastMCP:
    """Create and configure the MCP server.

    Returns:
        Configured FastMCP server instance
    """
    config = get_config()
    server = FastMCP("terminal_mcp", lifespan=app_lifespan)

    configure_middleware(server, config.settings)

    server.tool(output_schema=None)(execute_command)
    server.tool()(run)
    # terminal may return UIResource content, which has no output schema
    server.tool(output_schema=None)(terminal)

    server.resource("sessions://list")(list_sessions_resource)
    server.resource("terminal://{session}/history")(session_history_resource)
    server.resource("terminal://{session}/cwd")(session_cwd_resource)
    server.resource("terminal://{session}/stats")(session_stats_resource)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
mcp = create_server()
