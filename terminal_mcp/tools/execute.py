"""Command execution tools.

Both tools run arbitrary shell code on the host with the server's
privileges. Expose them only behind authentication.
"""

import logging
from typing import Any

from fastmcp.exceptions import ToolError

from terminal_mcp.models import CommandRequest
from terminal_mcp.services import SpawnError, run_command

logger = logging.getLogger(__name__)


async def execute_command(command: str) -> str:
    """Run a shell command on the host and return its standard output.

    Uses ``sh -c`` on POSIX hosts and ``cmd /C`` on Windows. Blocks until
    the command exits; there is no timeout.

    Args:
        command: Command line passed verbatim to the shell.

    Returns:
        Decoded standard output when the command exits with status 0.

    Raises:
        ToolError: With the command's stderr (or stdout, or "") when it exits
            non-zero, or with "Failed to start shell: ..." when the shell
            itself cannot be started.
    """
    try:
        result = await run_command(CommandRequest(command))
    except SpawnError as e:
        raise ToolError(f"Failed to start shell: {e.reason}") from e

    if not result.success:
        raise ToolError(result.text)
    return result.text


async def run(command: str) -> dict[str, Any]:
    """Run a shell command and report which of the three outcomes occurred.

    Args:
        command: Command line passed verbatim to the shell.

    Returns:
        {"status": "success" | "failure" | "spawn_error",
         "output": stdout on success, diagnostic text otherwise,
         "returncode": exit status, or None if the shell never started}
    """
    try:
        result = await run_command(CommandRequest(command))
    except SpawnError as e:
        return {"status": "spawn_error", "output": e.reason, "returncode": None}

    return {
        "status": "success" if result.success else "failure",
        "output": result.text,
        "returncode": result.returncode,
    }
