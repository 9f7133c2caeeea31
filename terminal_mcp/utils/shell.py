"""Shell interpreter selection and quoting helpers."""

import os
import shlex
from typing import NamedTuple


class Interpreter(NamedTuple):
    """A command interpreter and the flag that makes it run one string."""

    path: str
    flag: str

    def argv(self, command: str) -> list[str]:
        """Build the child argv for running ``command`` through this shell."""
        return [self.path, self.flag, command]


WINDOWS_INTERPRETER = Interpreter("cmd", "/C")
POSIX_INTERPRETER = Interpreter("sh", "-c")


def select_interpreter(os_family: str | None = None) -> Interpreter:
    """Pick the shell for an OS family.

    Args:
        os_family: Value in the style of ``os.name`` ("nt" for Windows,
            anything else is treated as POSIX). Defaults to the host.

    Returns:
        ``cmd /C`` on Windows, ``sh -c`` everywhere else
    """
    family = os.name if os_family is None else os_family
    if family == "nt":
        return WINDOWS_INTERPRETER
    return POSIX_INTERPRETER


def quote_arg(arg: str) -> str:
    """Safely quote a POSIX shell argument.

    Args:
        arg: Argument to quote

    Returns:
        Shell-safe quoted argument
    """
    return shlex.quote(arg)


def double_quote_arg(arg: str) -> str:
    """Wrap a POSIX shell argument in double quotes.

    Unlike :func:`quote_arg`, ``$VAR`` and ``${VAR}`` still expand, so
    ``cd $HOME/src`` behaves as typed. Backslash, double quote and backtick
    are escaped.
    """
    escaped = arg.replace("\\", "\\\\").replace('"', '\\"').replace("`", "\\`")
    return f'"{escaped}"'
