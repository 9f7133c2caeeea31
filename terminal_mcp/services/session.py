"""Stateful terminal session layered over the command executor.

Each call to the executor starts a fresh shell, so a session keeps its own
idea of the working directory and replays it in front of every command with
``cd <dir> && ...``. Directory changes are resolved by running the ``cd``
in a probe shell and reading back ``pwd``. The probe syntax is POSIX.
"""

import asyncio
import logging
import time
from collections import deque
from collections.abc import Mapping
from datetime import datetime, timedelta

from terminal_mcp.models import (
    CommandRecord,
    CommandResult,
    CommandStats,
    LineKind,
    TerminalLine,
)
from terminal_mcp.services.executor import SpawnError, run_command
from terminal_mcp.utils.aliases import expand_alias
from terminal_mcp.utils.ansi import strip_ansi
from terminal_mcp.utils.paths import short_path
from terminal_mcp.utils.shell import Interpreter, double_quote_arg, quote_arg

logger = logging.getLogger(__name__)

NO_OUTPUT = "(no output)"
COMMAND_LOG_SIZE = 500
STATS_WINDOW = timedelta(minutes=1)


class TerminalSession:
    """A named terminal with a working directory and a bounded transcript."""

    def __init__(
        self,
        name: str,
        aliases: Mapping[str, str] | None = None,
        max_history: int = 1000,
        interpreter: Interpreter | None = None,
        command_log_size: int = COMMAND_LOG_SIZE,
    ) -> None:
        self.name = name
        self.aliases: Mapping[str, str] = aliases or {}
        self.interpreter = interpreter
        self.current_dir = ""
        self.previous_dir = ""
        self.created_at = datetime.now()
        self.last_used = self.created_at
        self._lines: deque[TerminalLine] = deque(maxlen=max_history)
        self._command_log: deque[CommandRecord] = deque(maxlen=command_log_size)
        self._lock = asyncio.Lock()

    @property
    def lines(self) -> list[TerminalLine]:
        """Snapshot of the transcript, oldest first."""
        return list(self._lines)

    @property
    def short_dir(self) -> str:
        return short_path(self.current_dir)

    @property
    def command_log(self) -> list[CommandRecord]:
        """Snapshot of the timed command log, oldest first."""
        return list(self._command_log)

    def stats(self, now: datetime | None = None) -> CommandStats:
        """Commands run in the last minute, their mean duration, and the log size."""
        cutoff = (now or datetime.now()) - STATS_WINDOW
        recent = [r for r in self._command_log if r.timestamp > cutoff]
        average = sum(r.duration_ms for r in recent) / len(recent) if recent else 0.0
        return CommandStats(
            per_minute=len(recent),
            average_ms=average,
            total=len(self._command_log),
        )

    async def initialize(self) -> None:
        """Seed the working directory from the server's own cwd."""
        try:
            result = await run_command("pwd", self.interpreter)
        except SpawnError as e:
            logger.warning("Cannot determine initial directory (session=%s): %s", self.name, e)
            return

        if not result.success:
            logger.warning(
                "Cannot determine initial directory (session=%s): %s",
                self.name,
                result.text.strip(),
            )
            return

        self.current_dir = strip_ansi(result.text.strip())
        self.previous_dir = self.current_dir
        logger.debug("Session initialized (session=%s, cwd=%s)", self.name, self.current_dir)

    def clear(self) -> None:
        """Drop the transcript, keeping the working directory."""
        self._lines.clear()

    async def run(self, raw: str) -> list[TerminalLine]:
        """Run one line of input.

        Args:
            raw: Command as typed; aliases are expanded on the first word.

        Returns:
            Lines appended to the transcript by this call.
        """
        command = raw.strip()
        if not command:
            return []

        async with self._lock:
            self.last_used = datetime.now()
            command = expand_alias(command, self.aliases)

            if command == "cd" or command.startswith("cd "):
                return await self._change_directory(raw, command)

            if command == "clear":
                self.clear()
                return []

            return await self._execute(raw, command)

    def _append(self, kind: LineKind, text: str) -> TerminalLine:
        line = TerminalLine(kind=kind, text=text)
        self._lines.append(line)
        return line

    def _record(
        self,
        raw: str,
        directory: str,
        started: datetime,
        elapsed_ms: float,
        result: CommandResult | None,
    ) -> None:
        self._command_log.append(
            CommandRecord(
                timestamp=started,
                command=raw.strip(),
                directory=directory,
                duration_ms=elapsed_ms,
                success=result is not None and result.success,
                output_lines=len(result.text.splitlines()) if result is not None else 0,
            )
        )

    async def _timed_run(self, raw: str, shell_command: str) -> CommandResult:
        """Run through the executor and add the attempt to the command log."""
        directory = self.current_dir
        started = datetime.now()
        start = time.perf_counter()
        try:
            result = await run_command(shell_command, self.interpreter)
        except SpawnError:
            self._record(raw, directory, started, (time.perf_counter() - start) * 1000, None)
            raise

        self._record(raw, directory, started, (time.perf_counter() - start) * 1000, result)
        return result

    def _in_current_dir(self, command: str) -> str:
        if not self.current_dir:
            return command
        return f"cd {quote_arg(self.current_dir)} && {command}"

    async def _execute(self, raw: str, command: str) -> list[TerminalLine]:
        new_lines = [self._append("command", f"$ {raw.strip()}")]

        try:
            result = await self._timed_run(raw, self._in_current_dir(command))
        except SpawnError as e:
            logger.warning("Spawn failed (session=%s): %s", self.name, e.reason)
            new_lines.append(self._append("error", e.reason))
            return new_lines

        if result.success:
            new_lines.append(self._append("output", strip_ansi(result.text or NO_OUTPUT)))
        else:
            new_lines.append(self._append("error", strip_ansi(result.text)))
        return new_lines

    def _probe_for(self, target: str) -> str | None:
        """Build the shell command that enters ``target`` and prints pwd.

        Returns None when ``target`` is ``-`` and there is no previous dir.
        """
        if target == "-":
            if not self.previous_dir:
                return None
            return f"cd {quote_arg(self.previous_dir)} && pwd"
        if target in ("", "~"):
            return "cd && pwd"
        # Typed targets are double quoted so $VAR still expands
        if target.startswith("~"):
            return f"cd {double_quote_arg('$HOME' + target[1:])} && pwd"
        if target.startswith("/") or _is_drive_path(target):
            return f"cd {double_quote_arg(target)} && pwd"
        if self.current_dir:
            return (
                f"cd {quote_arg(self.current_dir)} && cd {double_quote_arg(target)} && pwd"
            )
        return f"cd {double_quote_arg(target)} && pwd"

    async def _change_directory(self, raw: str, command: str) -> list[TerminalLine]:
        new_lines = [self._append("command", f"$ {raw.strip()}")]
        target = command[2:].strip() or "~"

        probe = self._probe_for(target)
        if probe is None:
            new_lines.append(self._append("error", "cd: OLDPWD not set"))
            return new_lines

        try:
            result = await self._timed_run(raw, probe)
        except SpawnError as e:
            logger.warning("Spawn failed (session=%s): %s", self.name, e.reason)
            new_lines.append(self._append("error", e.reason))
            return new_lines

        if not result.success:
            shown = self.previous_dir if target == "-" else target
            new_lines.append(
                self._append("error", f"cd: {shown}: No such file or directory")
            )
            return new_lines

        new_dir = strip_ansi(result.text.strip())
        self.previous_dir = self.current_dir
        self.current_dir = new_dir
        logger.debug("Directory changed (session=%s, cwd=%s)", self.name, new_dir)
        new_lines.append(self._append("output", f"Changed directory to: {new_dir}"))
        return new_lines


def _is_drive_path(path: str) -> bool:
    return len(path) >= 3 and path[0].isalpha() and path[1] == ":" and path[2] == "\\"
