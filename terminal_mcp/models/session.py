"""Terminal session data models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

LineKind = Literal["command", "output", "error"]


@dataclass(frozen=True)
class TerminalLine:
    """One entry of a session transcript."""

    kind: LineKind
    text: str

    @property
    def is_error(self) -> bool:
        return self.kind == "error"


@dataclass(frozen=True)
class CommandRecord:
    """One command run by a session, with its timing."""

    timestamp: datetime
    command: str
    directory: str
    duration_ms: float
    success: bool
    output_lines: int


@dataclass(frozen=True)
class CommandStats:
    """Aggregates over a session's command log.

    ``per_minute`` and ``average_ms`` cover the last minute only;
    ``total`` counts every record still in the log.
    """

    per_minute: int
    average_ms: float
    total: int
