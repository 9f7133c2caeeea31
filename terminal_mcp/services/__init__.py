"""Services for Terminal MCP."""

from terminal_mcp.services.executor import (
    SpawnError,
    classify_result,
    decode_output,
    execute_command,
    run_command,
)
from terminal_mcp.services.registry import SessionRegistry
from terminal_mcp.services.session import TerminalSession
from terminal_mcp.services.state import (
    get_config,
    get_registry,
    reset_state,
    set_config,
    set_registry,
)

__all__ = [
    "SessionRegistry",
    "SpawnError",
    "TerminalSession",
    "classify_result",
    "decode_output",
    "execute_command",
    "get_config",
    "get_registry",
    "reset_state",
    "run_command",
    "set_config",
    "set_registry",
]
