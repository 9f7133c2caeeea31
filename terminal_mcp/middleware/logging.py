"""Request logging for tool calls and resource reads.

Entry lines show what is about to run on the host::

    >>> TOOL: terminal[build] $ make test
    <<< TOOL: terminal -> 2 content item(s) [812.4ms]
    >>> TOOL: run $ false
    <<< TOOL: run -> status=failure exit=1 [3.1ms]
"""

import json
import logging
import time
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from terminal_mcp.middleware.base import TerminalMiddleware

COMMAND_PREVIEW_CHARS = 80

# Handled by on_call_tool / on_read_resource
_DEDICATED_METHODS = ("tools/call", "resources/read")


def describe_call(tool_name: str, args: dict[str, Any] | None) -> str:
    """Render a tool call as ``name[session] $ command key=value``."""
    remaining = dict(args or {})
    command = remaining.pop("command", None)
    session = remaining.pop("session", None)

    parts = [f"{tool_name}[{session}]" if session else tool_name]
    if command is not None:
        text = str(command)
        if len(text) > COMMAND_PREVIEW_CHARS:
            text = text[:COMMAND_PREVIEW_CHARS] + "..."
        parts.append(f"$ {text}")
    parts.extend(f"{key}={value!r}" for key, value in remaining.items())
    return " ".join(parts)


def summarize_result(result: Any) -> str:
    """Short description of a handler result for the exit line."""
    if result is None:
        return "null"

    if isinstance(result, dict) and "status" in result:
        returncode = result.get("returncode")
        if returncode is None:
            return f"status={result['status']}"
        return f"status={result['status']} exit={returncode}"

    if isinstance(result, str):
        line_count = result.count("\n") + 1
        if line_count == 1:
            return f"{len(result)} chars"
        return f"{len(result)} chars, {line_count} lines"

    if isinstance(result, (list, tuple)):
        return f"{len(result)} items"

    # ToolResult from FastMCP: prefer the structured `run` payload
    structured = getattr(result, "structured_content", None)
    if isinstance(structured, dict) and "status" in structured:
        return summarize_result(structured)

    content = getattr(result, "content", None)
    if isinstance(content, (list, tuple)):
        return f"{len(content)} content item(s)"

    return type(result).__name__


class LoggingMiddleware(TerminalMiddleware):
    """Logs every tool call and resource read with its outcome and duration.

    Exit lines are logged at WARNING once a request takes longer than
    ``slow_threshold_ms``. Failures are logged at ERROR and re-raised.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_payloads: bool = False,
        max_payload_length: int = 1000,
        slow_threshold_ms: float = 1000.0,
    ) -> None:
        """Initialize logging middleware.

        Args:
            logger: Optional custom logger.
            include_payloads: Also log full arguments and results at DEBUG.
            max_payload_length: Payloads longer than this are truncated.
            slow_threshold_ms: Duration at which exit lines become warnings.
        """
        super().__init__(logger=logger)
        self.include_payloads = include_payloads
        self.max_payload_length = max_payload_length
        self.slow_threshold_ms = slow_threshold_ms

    def _payload(self, data: Any) -> str:
        try:
            text = json.dumps(data, default=str)
        except (TypeError, ValueError):
            text = str(data)

        if len(text) <= self.max_payload_length:
            return text
        return f"{text[: self.max_payload_length]}... [truncated]"

    async def _timed(
        self,
        kind: str,
        label: str,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        start = time.perf_counter()
        try:
            result = await call_next(context)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self.logger.error(
                "!!! %s: %s -> %s: %s [%.1fms]",
                kind,
                label,
                type(e).__name__,
                e,
                elapsed_ms,
            )
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000
        slow = elapsed_ms >= self.slow_threshold_ms
        self.logger.log(
            logging.WARNING if slow else logging.INFO,
            "<<< %s: %s -> %s [%.1fms%s]",
            kind,
            label,
            summarize_result(result),
            elapsed_ms,
            " SLOW!" if slow else "",
        )
        if self.include_payloads and result is not None:
            self.logger.debug("    Result: %s", self._payload(result))
        return result

    async def on_call_tool(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        tool_name = getattr(context.message, "name", "unknown")
        args = getattr(context.message, "arguments", None)

        self.logger.info(">>> TOOL: %s", describe_call(tool_name, args))
        if self.include_payloads and args:
            self.logger.debug("    Args: %s", self._payload(args))

        return await self._timed("TOOL", tool_name, context, call_next)

    async def on_read_resource(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        uri = str(getattr(context.message, "uri", "unknown"))
        self.logger.info(">>> RESOURCE: %s", uri)
        return await self._timed("RESOURCE", uri, context, call_next)

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log listing and lifecycle messages at DEBUG."""
        if context.method in _DEDICATED_METHODS:
            return await call_next(context)

        start = time.perf_counter()
        self.logger.debug(">>> MCP: %s", context.method)
        result = await call_next(context)
        self.logger.debug(
            "<<< MCP: %s [%.1fms]",
            context.method,
            (time.perf_counter() - start) * 1000,
        )
        return result
