"""Command execution data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandRequest:
    """A raw command line, passed to the shell verbatim."""

    command: str


@dataclass(frozen=True)
class CommandSuccess:
    """The command exited with status 0."""

    output: str
    returncode: int = 0

    @property
    def success(self) -> bool:
        return True

    @property
    def text(self) -> str:
        return self.output


@dataclass(frozen=True)
class CommandFailure:
    """The shell ran but the command exited non-zero or abnormally.

    ``message`` is stderr when non-empty, otherwise stdout, otherwise "".
    ``returncode`` is negative when the process was killed by a signal.
    """

    message: str
    returncode: int | None = None

    @property
    def success(self) -> bool:
        return False

    @property
    def text(self) -> str:
        return self.message


CommandResult = CommandSuccess | CommandFailure
