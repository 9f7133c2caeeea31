"""Tests for logging middleware."""

import asyncio
import logging
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from terminal_mcp.middleware.logging import (
    LoggingMiddleware,
    describe_call,
    summarize_result,
)


def rendered(call: Any) -> str:
    """The message a mocked logger call would have produced."""
    args = call.args
    if isinstance(args[0], int):
        args = args[1:]
    return args[0] % args[1:]


@pytest.fixture
def mock_tool_context() -> MagicMock:
    """Create a mock middleware context for tool calls."""
    context = MagicMock()
    context.method = "tools/call"
    context.source = "client"
    context.message = MagicMock()
    context.message.name = "terminal"
    context.message.arguments = {"command": "ls -la", "session": "build"}
    return context


@pytest.fixture
def mock_resource_context() -> MagicMock:
    """Create a mock middleware context for resource reads."""
    context = MagicMock()
    context.method = "resources/read"
    context.source = "client"
    context.message = MagicMock()
    context.message.uri = "terminal://default/history"
    return context


class TestDescribeCall:
    """Tests for the tool call entry line."""

    def test_session_and_command(self) -> None:
        args = {"command": "make test", "session": "build"}
        assert describe_call("terminal", args) == "terminal[build] $ make test"

    def test_command_only(self) -> None:
        assert describe_call("run", {"command": "false"}) == "run $ false"

    def test_long_command_is_cut(self) -> None:
        described = describe_call("run", {"command": "echo " + "x" * 200})

        assert described.endswith("...")
        assert "x" * 200 not in described

    def test_other_arguments(self) -> None:
        assert describe_call("other", {"depth": 2}) == "other depth=2"
        assert describe_call("other", None) == "other"


class TestSummarizeResult:
    """Tests for the exit line summary."""

    @pytest.mark.parametrize(
        ("result", "summary"),
        [
            (None, "null"),
            ("abc", "3 chars"),
            ("a\nb", "3 chars, 2 lines"),
            ([1, 2], "2 items"),
            ({"status": "failure", "output": "", "returncode": 2}, "status=failure exit=2"),
            ({"status": "spawn_error", "output": "x", "returncode": None}, "status=spawn_error"),
        ],
    )
    def test_plain_values(self, result: object, summary: str) -> None:
        assert summarize_result(result) == summary

    def test_tool_result_with_structured_run_payload(self) -> None:
        result = MagicMock()
        result.structured_content = {"status": "success", "output": "", "returncode": 0}

        assert summarize_result(result) == "status=success exit=0"

    def test_tool_result_content_count(self) -> None:
        result = MagicMock()
        result.structured_content = None
        result.content = [MagicMock(), MagicMock()]

        assert summarize_result(result) == "2 content item(s)"


@pytest.mark.asyncio
async def test_logs_tool_call(mock_tool_context: MagicMock) -> None:
    """Tool calls are logged on entry and completion."""
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)

    await middleware.on_call_tool(mock_tool_context, AsyncMock(return_value="out"))

    all_info_calls = str(mock_logger.info.call_args_list)
    exit_line = rendered(mock_logger.log.call_args)
    assert ">>> TOOL" in all_info_calls
    assert "terminal[build] $ ls -la" in all_info_calls
    assert exit_line.startswith("<<< TOOL: terminal -> 3 chars")
    assert mock_logger.log.call_args[0][0] == logging.INFO


@pytest.mark.asyncio
async def test_logs_resource_read(mock_resource_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)

    await middleware.on_read_resource(
        mock_resource_context, AsyncMock(return_value="$ pwd\n/tmp")
    )

    all_info_calls = str(mock_logger.info.call_args_list)
    assert ">>> RESOURCE" in all_info_calls
    assert "terminal://default/history" in all_info_calls
    assert rendered(mock_logger.log.call_args).startswith(
        "<<< RESOURCE: terminal://default/history -> 10 chars, 2 lines"
    )


@pytest.mark.asyncio
async def test_payloads_truncated_when_enabled(mock_tool_context: MagicMock) -> None:
    """Payloads are logged at DEBUG and truncated past max_payload_length."""
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(
        logger=mock_logger,
        include_payloads=True,
        max_payload_length=20,
    )
    mock_tool_context.message.arguments = {"command": "x" * 100}

    await middleware.on_call_tool(mock_tool_context, AsyncMock(return_value="ok"))

    all_calls = str(mock_logger.debug.call_args_list)
    assert "Args:" in all_calls
    assert "Result:" in all_calls
    assert "[truncated]" in all_calls


@pytest.mark.asyncio
async def test_payloads_not_logged_by_default(mock_tool_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)

    await middleware.on_call_tool(mock_tool_context, AsyncMock(return_value="ok"))

    mock_logger.debug.assert_not_called()


@pytest.mark.asyncio
async def test_logs_tool_errors(mock_tool_context: MagicMock) -> None:
    """Errors are logged at ERROR and re-raised."""
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)
    call_next = AsyncMock(side_effect=ValueError("test error"))

    with pytest.raises(ValueError):
        await middleware.on_call_tool(mock_tool_context, call_next)

    mock_logger.error.assert_called_once()
    error_line = rendered(mock_logger.error.call_args)
    assert error_line.startswith("!!! TOOL: terminal -> ValueError: test error")
    mock_logger.log.assert_not_called()


@pytest.mark.asyncio
async def test_logs_resource_errors(mock_resource_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)
    call_next = AsyncMock(side_effect=LookupError("gone"))

    with pytest.raises(LookupError):
        await middleware.on_read_resource(mock_resource_context, call_next)

    assert rendered(mock_logger.error.call_args).startswith(
        "!!! RESOURCE: terminal://default/history -> LookupError: gone"
    )


@pytest.mark.asyncio
async def test_on_message_passes_through_handled_methods(
    mock_tool_context: MagicMock,
) -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)

    result = await middleware.on_message(mock_tool_context, AsyncMock(return_value="r"))

    assert result == "r"
    mock_logger.info.assert_not_called()
    mock_logger.debug.assert_not_called()


@pytest.mark.asyncio
async def test_on_message_logs_other_methods() -> None:
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)
    context = MagicMock()
    context.method = "tools/list"

    await middleware.on_message(context, AsyncMock(return_value=[]))

    assert "tools/list" in str(mock_logger.debug.call_args_list)


@pytest.mark.asyncio
async def test_slow_threshold() -> None:
    """Requests slower than the threshold are logged at WARNING."""
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger, slow_threshold_ms=1.0)
    context = MagicMock()
    context.method = "tools/call"
    context.message = MagicMock()
    context.message.name = "execute_command"
    context.message.arguments = {"command": "sleep 0.01"}

    async def slow_handler(_: MagicMock) -> str:
        await asyncio.sleep(0.01)
        return "result"

    await middleware.on_call_tool(context, slow_handler)

    call_args = mock_logger.log.call_args_list
    assert call_args[0][0][0] == logging.WARNING
    assert "SLOW!" in str(call_args)
