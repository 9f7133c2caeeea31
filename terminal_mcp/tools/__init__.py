"""MCP tools for Terminal MCP."""

from terminal_mcp.tools.execute import execute_command, run
from terminal_mcp.tools.terminal import terminal

__all__ = ["execute_command", "run", "terminal"]
