"""Utilities for Terminal MCP."""

from terminal_mcp.utils.aliases import DEFAULT_ALIASES, expand_alias, parse_aliases
from terminal_mcp.utils.ansi import strip_ansi
from terminal_mcp.utils.console import ColorfulFormatter, MCPRequestFormatter
from terminal_mcp.utils.paths import short_path
from terminal_mcp.utils.shell import Interpreter, quote_arg, select_interpreter
from terminal_mcp.utils.validation import validate_session_name

__all__ = [
    "DEFAULT_ALIASES",
    "ColorfulFormatter",
    "Interpreter",
    "MCPRequestFormatter",
    "expand_alias",
    "parse_aliases",
    "quote_arg",
    "select_interpreter",
    "short_path",
    "strip_ansi",
    "validate_session_name",
]
