"""Command alias table and expansion."""

import logging
from collections.abc import Mapping
from typing import Final

logger = logging.getLogger(__name__)

DEFAULT_ALIASES: Final[dict[str, str]] = {
    "ll": "ls -la",
    "la": "ls -la",
    "l": "ls -lh",
    "ls": "ls --color=auto",
    "..": "cd ..",
    "...": "cd ../..",
    "....": "cd ../../..",
    "~": "cd ~",
    "-": "cd -",
    "md": "mkdir",
    "rd": "rmdir",
    "cls": "clear",
    "c": "clear",
    "gs": "git status",
    "ga": "git add",
    "gc": "git commit",
    "gp": "git push",
    "gl": "git log",
}


def parse_aliases(value: str) -> dict[str, str]:
    """Parse ``name=expansion`` pairs separated by ``;``.

    Malformed entries are skipped with a warning.

    Examples:
        parse_aliases("k=kubectl;gd=git diff") -> {"k": "kubectl", "gd": "git diff"}
    """
    aliases: dict[str, str] = {}
    for entry in value.split(";"):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, expansion = entry.partition("=")
        name = name.strip()
        expansion = expansion.strip()
        if not sep or not name or not expansion or " " in name:
            logger.warning("Ignoring malformed alias entry: %r", entry)
            continue
        aliases[name] = expansion
    return aliases


def expand_alias(command: str, aliases: Mapping[str, str]) -> str:
    """Replace the first word of ``command`` with its alias expansion.

    The command is split on single spaces so the remaining arguments are
    kept exactly as typed.
    """
    parts = command.split(" ")
    expansion = aliases.get(parts[0])
    if expansion is None:
        return command
    parts[0] = expansion
    return " ".join(parts)
