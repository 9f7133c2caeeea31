"""Data models for Terminal MCP."""

from terminal_mcp.models.command import (
    CommandFailure,
    CommandRequest,
    CommandResult,
    CommandSuccess,
)
from terminal_mcp.models.session import (
    CommandRecord,
    CommandStats,
    LineKind,
    TerminalLine,
)

__all__ = [
    "CommandFailure",
    "CommandRecord",
    "CommandRequest",
    "CommandResult",
    "CommandStats",
    "CommandSuccess",
    "LineKind",
    "TerminalLine",
]
