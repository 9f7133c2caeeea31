"""Tests for MCP tools."""

from unittest.mock import AsyncMock, patch

import pytest
from fastmcp.exceptions import ToolError

from terminal_mcp.config import Config, Settings
from terminal_mcp.models import CommandFailure, CommandRequest, CommandSuccess, TerminalLine
from terminal_mcp.services import SessionRegistry, SpawnError, set_config, set_registry
from terminal_mcp.services.session import TerminalSession
from terminal_mcp.tools import execute_command, run, terminal
from terminal_mcp.tools.terminal import format_lines

RUN_COMMAND = "terminal_mcp.tools.execute.run_command"


class TestExecuteCommand:
    """Tests for the execute_command tool."""

    @pytest.mark.asyncio
    async def test_returns_stdout_on_success(self) -> None:
        mock_run = AsyncMock(return_value=CommandSuccess("hello\n"))
        with patch(RUN_COMMAND, mock_run):
            assert await execute_command("echo hello") == "hello\n"

        mock_run.assert_awaited_once_with(CommandRequest("echo hello"))

    @pytest.mark.asyncio
    async def test_failure_raises_tool_error_with_message(self) -> None:
        failure = CommandFailure("oops\n", returncode=2)
        with patch(RUN_COMMAND, AsyncMock(return_value=failure)):
            with pytest.raises(ToolError, match="oops"):
                await execute_command("echo oops 1>&2; exit 2")

    @pytest.mark.asyncio
    async def test_spawn_error_is_reported_separately(self) -> None:
        error = SpawnError("ls", "[Errno 2] No such file or directory: 'sh'")
        with patch(RUN_COMMAND, AsyncMock(side_effect=error)):
            with pytest.raises(ToolError, match="Failed to start shell"):
                await execute_command("ls")


class TestRun:
    """Tests for the structured run tool."""

    @pytest.mark.asyncio
    async def test_success(self) -> None:
        with patch(RUN_COMMAND, AsyncMock(return_value=CommandSuccess("ok\n"))):
            assert await run("echo ok") == {
                "status": "success",
                "output": "ok\n",
                "returncode": 0,
            }

    @pytest.mark.asyncio
    async def test_failure(self) -> None:
        with patch(RUN_COMMAND, AsyncMock(return_value=CommandFailure("", 1))):
            assert await run("exit 1") == {
                "status": "failure",
                "output": "",
                "returncode": 1,
            }

    @pytest.mark.asyncio
    async def test_spawn_error(self) -> None:
        with patch(RUN_COMMAND, AsyncMock(side_effect=SpawnError("x", "denied"))):
            assert await run("x") == {
                "status": "spawn_error",
                "output": "denied",
                "returncode": None,
            }


class TestTerminal:
    """Tests for the terminal tool."""

    @pytest.fixture
    def fake_session(self) -> TerminalSession:
        session = TerminalSession("default")
        session.run = AsyncMock(  # type: ignore[method-assign]
            return_value=[
                TerminalLine("command", "$ false"),
                TerminalLine("error", "boom"),
            ]
        )
        return session

    @pytest.fixture
    def registry(self, fake_session: TerminalSession) -> SessionRegistry:
        registry = SessionRegistry()
        registry.get_or_create = AsyncMock(return_value=fake_session)  # type: ignore[method-assign]
        set_registry(registry)
        return registry

    @pytest.mark.asyncio
    async def test_returns_new_lines_as_text(self, registry: SessionRegistry) -> None:
        set_config(Config(settings=Settings(enable_ui=False)))

        result = await terminal("false")

        assert result == "$ false\n[error] boom"
        registry.get_or_create.assert_awaited_once_with("default")  # type: ignore[attr-defined]

    @pytest.mark.asyncio
    async def test_returns_ui_resource_when_enabled(self, registry: SessionRegistry) -> None:
        set_config(Config(settings=Settings(enable_ui=True)))

        result = await terminal("false", session="default")

        assert isinstance(result, list)
        assert len(result) == 1
        assert str(result[0].resource.uri) == "ui://terminal/default"

    @pytest.mark.asyncio
    async def test_invalid_session_name(self) -> None:
        set_config(Config())
        set_registry(SessionRegistry())

        with pytest.raises(ToolError, match="Invalid session name"):
            await terminal("ls", session="no/slashes")


def test_format_lines_marks_errors() -> None:
    lines = [TerminalLine("command", "$ x"), TerminalLine("error", "bad")]
    assert format_lines(lines) == "$ x\n[error] bad"
