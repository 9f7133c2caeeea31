"""Colorful console logging formatter.

Lines look like::

    14:02:11.532 10/19 | INFO     | services.executor    | Command completed: exit=0 [4.1ms]
"""

import logging
import re
from datetime import datetime

RESET = "\033[0m"

COLORS = {
    "bold": "\033[1m",
    "dim": "\033[2m",
    "white": "\033[37m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "magenta": "\033[35m",
    "yellow": "\033[33m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Longest prefix first
COMPONENT_COLORS = (
    ("terminal_mcp.services.executor", COLORS["bright_magenta"]),
    ("terminal_mcp.services", COLORS["magenta"]),
    ("terminal_mcp.server", COLORS["bright_cyan"]),
    ("terminal_mcp.tools", COLORS["bright_blue"]),
    ("terminal_mcp.resources", COLORS["cyan"]),
    ("terminal_mcp.middleware", COLORS["yellow"]),
    ("terminal_mcp.config", COLORS["green"]),
)

HIGHLIGHTS = (
    (re.compile(r"\w+://\S+"), COLORS["bright_blue"]),
    (re.compile(r"\b\d+(?:\.\d+)?ms\b"), COLORS["bright_yellow"]),
    (re.compile(r"\bexit=-?\d+"), COLORS["bright_magenta"]),
    (re.compile(r"\bsession=[\w.-]+"), COLORS["cyan"]),
)

# (keywords, color, marker) checked in order against the lowercased message
LIFECYCLE_MARKERS = (
    (("starting", "ready"), COLORS["bright_green"], ">>>"),
    (("shutting down", "shutdown"), COLORS["bright_red"], "<<<"),
    (("error", "failed"), COLORS["bright_red"], "!!"),
    (("warning", "slow", "rate limit"), COLORS["bright_yellow"], "!"),
    (("completed", "changed directory"), COLORS["bright_green"], "OK"),
    (("spawning", "creating"), COLORS["bright_cyan"], "+"),
    (("evicting", "removing", "cleared"), COLORS["bright_yellow"], "-"),
)
MARKER_WIDTH = 4


class ColorfulFormatter(logging.Formatter):
    """Compact timestamp, level, component and message, colored for a TTY."""

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def _paint(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{RESET}"

    def _component(self, name: str) -> str:
        color = COLORS["white"]
        for prefix, prefix_color in COMPONENT_COLORS:
            if name.startswith(prefix):
                color = prefix_color
                break
        short = name.removeprefix("terminal_mcp.")
        return self._paint(f"{short:<20}", color)

    def _highlight(self, message: str) -> str:
        if not self.use_colors:
            return message
        for pattern, color in HIGHLIGHTS:
            message = pattern.sub(lambda m, c=color: f"{c}{m.group(0)}{RESET}", message)
        return message

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created)
        timestamp = f"{created:%H:%M:%S}.{int(record.msecs):03d} {created:%m/%d}"
        level = record.levelname
        sep = self._paint("|", COLORS["dim"])

        line = " ".join([
            self._paint(timestamp, COLORS["dim"]),
            sep,
            self._paint(f"{level:<8}", LEVEL_COLORS.get(level, COLORS["white"])),
            sep,
            self._component(record.name),
            sep,
            self._highlight(record.getMessage()),
        ])
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class MCPRequestFormatter(ColorfulFormatter):
    """Adds a lifecycle marker column in front of colored lines."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        if not self.use_colors:
            return base

        message = record.getMessage().lower()
        for keywords, color, marker in LIFECYCLE_MARKERS:
            if any(keyword in message for keyword in keywords):
                padding = " " * (MARKER_WIDTH - len(marker))
                return f"{color}{marker}{RESET}{padding}{base}"
        return " " * MARKER_WIDTH + base
