"""Terminal session resources."""

from fastmcp.exceptions import ResourceError

from terminal_mcp.services import get_registry
from terminal_mcp.services.session import TerminalSession
from terminal_mcp.tools.terminal import format_lines


def _require_session(name: str) -> TerminalSession:
    session = get_registry().get(name)
    if session is None:
        raise ResourceError(f"Unknown terminal session: {name}")
    return session


async def list_sessions_resource() -> str:
    """List active terminal sessions with their working directories."""
    sessions = get_registry().sessions()
    if not sessions:
        return "No active terminal sessions."

    lines = ["Active Terminal Sessions", "=" * 40, ""]
    for s in sorted(sessions, key=lambda s: s.name):
        lines.append(f"{s.name}")
        lines.append(f"    cwd:       {s.current_dir or '(unknown)'}")
        lines.append(f"    short:     {s.short_dir or '(unknown)'}")
        lines.append(f"    lines:     {len(s.lines)}")
        lines.append(f"    last used: {s.last_used.isoformat(timespec='seconds')}")
        lines.append(f"    history:   terminal://{s.name}/history")
        lines.append(f"    stats:     terminal://{s.name}/stats")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


async def session_history_resource(session: str) -> str:
    """Transcript of one session as plain text."""
    return format_lines(_require_session(session).lines)


async def session_cwd_resource(session: str) -> str:
    """Working directory of one session (empty if unknown)."""
    return _require_session(session).current_dir


async def session_stats_resource(session: str) -> str:
    """Command rate and timing for one session."""
    term = _require_session(session)
    stats = term.stats()
    return "\n".join([
        f"Session: {term.name}",
        f"Commands (last minute): {stats.per_minute}",
        f"Average time (last minute): {stats.average_ms:.0f}ms",
        f"Total logged: {stats.total}",
    ]) + "\n"
