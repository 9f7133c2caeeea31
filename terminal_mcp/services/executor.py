"""Local shell command executor.

Runs arbitrary, unvalidated command text through the host shell with the
privileges of this process. Anyone who can call into this module can execute
code on the host; that is the capability it exists to provide.
"""

import asyncio
import logging
import subprocess
import time

from terminal_mcp.models import CommandFailure, CommandRequest, CommandResult, CommandSuccess
from terminal_mcp.utils.shell import Interpreter, select_interpreter

logger = logging.getLogger(__name__)


class SpawnError(Exception):
    """The shell interpreter process could not be started.

    Distinct from CommandFailure, which means the shell ran and the command
    itself exited non-zero.
    """

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(reason)


def decode_output(data: bytes | None) -> str:
    """Decode captured output as UTF-8, replacing invalid byte sequences."""
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


def classify_result(returncode: int, stdout: str, stderr: str) -> CommandResult:
    """Turn an exit status and decoded streams into a CommandResult.

    Exit status 0 is success and carries stdout. Anything else is failure
    carrying stderr, falling back to stdout, falling back to "".
    """
    if returncode == 0:
        return CommandSuccess(output=stdout, returncode=returncode)
    return CommandFailure(message=stderr or stdout or "", returncode=returncode)


def execute_command(
    command: CommandRequest | str,
    interpreter: Interpreter | None = None,
) -> CommandResult:
    """Execute a command line through the platform shell and wait for it.

    Blocks until the child exits. There is no timeout and no way to cancel
    once started.

    Args:
        command: Raw command text, or a CommandRequest carrying it; passed
            to the shell verbatim.
        interpreter: Shell to use. Defaults to ``select_interpreter()``.

    Returns:
        CommandSuccess or CommandFailure depending on the exit status.

    Raises:
        SpawnError: If the interpreter process cannot be started.
    """
    if isinstance(command, CommandRequest):
        command = command.command
    shell = interpreter or select_interpreter()
    argv = shell.argv(command)

    logger.debug("Spawning %s %s (%d chars)", shell.path, shell.flag, len(command))
    start = time.perf_counter()

    try:
        completed = subprocess.run(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except (OSError, ValueError) as e:
        # ValueError covers arguments the OS cannot accept, e.g. embedded NUL
        reason = str(e)
        logger.warning("Failed to spawn %s: %s", shell.path, reason)
        raise SpawnError(command, reason) from e

    duration_ms = (time.perf_counter() - start) * 1000
    result = classify_result(
        completed.returncode,
        decode_output(completed.stdout),
        decode_output(completed.stderr),
    )

    logger.info(
        "Command %s: exit=%d [%.1fms]",
        "completed" if result.success else "failed",
        completed.returncode,
        duration_ms,
    )
    return result


async def run_command(
    command: CommandRequest | str,
    interpreter: Interpreter | None = None,
) -> CommandResult:
    """Run ``execute_command`` in a worker thread.

    The awaiting task still waits for the child to exit, but the event loop
    stays free to serve other requests in the meantime.

    Raises:
        SpawnError: If the interpreter process cannot be started.
    """
    return await asyncio.to_thread(execute_command, command, interpreter)
