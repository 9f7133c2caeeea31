"""UI resource generators for Terminal MCP."""

from terminal_mcp.ui.generators import create_terminal_ui

__all__ = ["create_terminal_ui"]
