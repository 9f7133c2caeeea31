"""Terminal session tool."""

import logging

from fastmcp.exceptions import ToolError
from mcp_ui_server.core import UIResource

from terminal_mcp.models import TerminalLine
from terminal_mcp.services import get_config, get_registry
from terminal_mcp.ui import create_terminal_ui

logger = logging.getLogger(__name__)


def format_lines(lines: list[TerminalLine]) -> str:
    """Render transcript lines as plain text, marking errors."""
    return "\n".join(
        f"[error] {line.text}" if line.is_error else line.text for line in lines
    )


async def terminal(command: str, session: str = "default") -> list[UIResource] | str:
    """Run a command in a persistent terminal session.

    Sessions remember their working directory between calls, so
    ``cd src`` followed by ``ls`` lists ``src``. Short aliases such as
    ``ll``, ``..`` and ``gs`` are expanded, and ``clear`` empties the
    transcript. Output has ANSI escape codes removed.

    Args:
        command: Command line to run in the session.
        session: Session name (letters, digits, '_', '.', '-').

    Examples:
        terminal("pwd")
        terminal("cd /var/log")
        terminal("ll", session="build")
        terminal("cd -")

    Returns:
        The new transcript lines as text, or an HTML transcript view when
        the UI is enabled.
    """
    config = get_config()
    registry = get_registry()

    try:
        term = await registry.get_or_create(session)
    except ValueError as e:
        raise ToolError(str(e)) from e

    new_lines = await term.run(command)

    if config.enable_ui:
        return [create_terminal_ui(term)]

    if not new_lines:
        return ""
    return format_lines(new_lines)
