"""Error logging and counting for MCP handlers."""

import logging
from collections import Counter
from collections.abc import Callable
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from terminal_mcp.middleware.base import TerminalMiddleware

ErrorCallback = Callable[[Exception, MiddlewareContext], None]


def _describe_request(context: MiddlewareContext) -> str:
    """``tools/call (execute_command)`` for tool calls, else the bare method."""
    tool_name = getattr(context.message, "name", None)
    if context.method == "tools/call" and isinstance(tool_name, str):
        return f"{context.method} ({tool_name})"
    return str(context.method)


class ErrorHandlingMiddleware(TerminalMiddleware):
    """Logs every exception escaping a handler, counts it by type, re-raises it.

    Command failures arrive as ``ToolError`` and reads of unknown sessions as
    ``ResourceError``.

    Example:
        >>> def on_error(exc, ctx):
        ...     alerts.send(f"{ctx.method}: {exc}")
        >>> server.add_middleware(ErrorHandlingMiddleware(error_callback=on_error))
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
        error_callback: ErrorCallback | None = None,
    ) -> None:
        """Initialize error handling middleware.

        Args:
            logger: Optional custom logger.
            include_traceback: Attach the traceback to each error log record.
            error_callback: Called with (exception, context) after logging.
        """
        super().__init__(logger=logger)
        self.include_traceback = include_traceback
        self.error_callback = error_callback
        self._counts: Counter[str] = Counter()

    def get_error_stats(self) -> dict[str, int]:
        """Error counts keyed by exception class name."""
        return dict(self._counts)

    def reset_stats(self) -> None:
        self._counts.clear()

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        try:
            return await call_next(context)
        except Exception as e:
            error_type = type(e).__name__
            self._counts[error_type] += 1
            self.logger.error(
                "Error in %s: %s: %s",
                _describe_request(context),
                error_type,
                e,
                exc_info=self.include_traceback,
            )
            self._notify(e, context)
            raise

    def _notify(self, error: Exception, context: MiddlewareContext) -> None:
        if self.error_callback is None:
            return
        try:
            self.error_callback(error, context)
        except Exception as callback_error:
            self.logger.warning("Error callback failed: %s", callback_error)
