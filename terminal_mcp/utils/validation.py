"""Input validation utilities."""

import re
from typing import Final

SESSION_NAME_PATTERN: Final = re.compile(r"^[A-Za-z0-9_.-]{1,64}$")


def validate_session_name(name: str) -> str:
    """Validate a terminal session name.

    Session names appear in resource URIs, so they are restricted to
    letters, digits, ``_``, ``.`` and ``-``.

    Args:
        name: The session name to validate

    Returns:
        The stripped session name

    Raises:
        ValueError: If the name is empty, too long, or has other characters
    """
    name = name.strip()
    if not name:
        raise ValueError("Session name cannot be empty")
    if not SESSION_NAME_PATTERN.match(name):
        raise ValueError(
            f"Invalid session name {name!r}: use 1-64 letters, digits, '_', '.' or '-'"
        )
    return name
