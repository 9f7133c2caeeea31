"""MCP resources for Terminal MCP."""

from terminal_mcp.resources.sessions import (
    list_sessions_resource,
    session_cwd_resource,
    session_history_resource,
    session_stats_resource,
)

__all__ = [
    "list_sessions_resource",
    "session_cwd_resource",
    "session_history_resource",
    "session_stats_resource",
]
