"""Base middleware classes for Terminal MCP."""

import logging
from abc import ABC, abstractmethod
from typing import Any

from fastmcp.server.middleware import Middleware


class TerminalMiddleware(Middleware):
    """FastMCP middleware with a configurable logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize middleware.

        Args:
            logger: Optional custom logger. Defaults to module logger.
        """
        self.logger = logger or logging.getLogger(__name__)


class MCPMiddleware(ABC):
    """Base class for transport-independent request checks.

    Subclasses inspect a plain context dict (client IP, API key, ...)
    built by whichever transport adapter runs them.
    """

    @abstractmethod
    async def process_request(
        self,
        method: str,
        params: dict[str, Any],
        context: dict[str, Any],
    ) -> dict[str, Any]:
        """Process request before the handler runs.

        Args:
            method: Request method name
            params: Request parameters
            context: Transport-specific context (client IP, etc.)

        Returns:
            Possibly modified context dictionary

        Raises:
            Exception: To reject the request
        """
