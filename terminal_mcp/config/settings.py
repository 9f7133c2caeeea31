"""Application settings from TERMINAL_* environment variables.

Malformed values never stop the server: they are logged at WARNING and the
default is used instead.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

ENV_PREFIX = "TERMINAL_"
TRANSPORTS = ("http", "stdio")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUTHY = ("1", "true", "yes", "on")


def _env(name: str) -> str | None:
    return os.getenv(ENV_PREFIX + name)


def _env_int(
    name: str,
    default: int,
    minimum: int | None = None,
    maximum: int | None = None,
) -> int:
    """Integer setting, falling back to ``default`` when unparsable or out of range."""
    raw = _env(name)
    if raw is None:
        return default

    try:
        value = int(raw)
    except ValueError:
        logger.warning(
            "Invalid int for %s%s: %r, using default %d", ENV_PREFIX, name, raw, default
        )
        return default

    if (minimum is not None and value < minimum) or (
        maximum is not None and value > maximum
    ):
        logger.warning(
            "%s%s=%d out of range [%s, %s], using default %d",
            ENV_PREFIX,
            name,
            value,
            minimum,
            maximum,
            default,
        )
        return default
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_choice(name: str, default: str, choices: tuple[str, ...], upper: bool = False) -> str:
    raw = _env(name)
    if raw is None:
        return default

    value = raw.strip().upper() if upper else raw.strip().lower()
    if value not in choices:
        logger.warning(
            "Unknown %s%s=%r (expected one of %s), using %s",
            ENV_PREFIX,
            name,
            raw,
            ", ".join(choices),
            default,
        )
        return default
    return value


def _env_list(name: str) -> list[str]:
    """Comma-separated setting with blanks dropped."""
    return [item.strip() for item in (_env(name) or "").split(",") if item.strip()]


@dataclass
class Settings:
    """Typed view of the TERMINAL_* environment."""

    # Transport
    transport: str = field(default="http")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    # Security
    api_keys: list[str] = field(default_factory=list)
    auth_enabled: bool = field(default=True)
    rate_limit_per_minute: int = field(default=60)
    rate_limit_burst: int = field(default=10)
    trust_forwarded_for: bool = field(default=False)

    # Sessions
    max_sessions: int = field(default=16)
    max_history: int = field(default=1000)
    enable_aliases: bool = field(default=True)
    aliases_raw: str = field(default="")

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)
    log_payloads: bool = field(default=False)
    slow_threshold_ms: int = field(default=1000)
    include_traceback: bool = field(default=False)

    # UI
    enable_ui: bool = field(default=False)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            transport=_env_choice("TRANSPORT", "http", TRANSPORTS),
            http_host=(_env("HTTP_HOST") or "127.0.0.1").strip(),
            http_port=_env_int("HTTP_PORT", 8000, minimum=1, maximum=65535),
            api_keys=_env_list("API_KEYS"),
            auth_enabled=_env_bool("AUTH_ENABLED", True),
            rate_limit_per_minute=_env_int("RATE_LIMIT_PER_MINUTE", 60, minimum=0),
            rate_limit_burst=_env_int("RATE_LIMIT_BURST", 10, minimum=1),
            trust_forwarded_for=_env_bool("TRUST_FORWARDED_FOR", False),
            max_sessions=_env_int("MAX_SESSIONS", 16, minimum=1),
            max_history=_env_int("MAX_HISTORY", 1000, minimum=1),
            enable_aliases=_env_bool("ENABLE_ALIASES", True),
            aliases_raw=_env("ALIASES") or "",
            log_level=_env_choice("LOG_LEVEL", "INFO", LOG_LEVELS, upper=True),
            log_colors=_env_bool("LOG_COLORS", True),
            log_payloads=_env_bool("LOG_PAYLOADS", False),
            slow_threshold_ms=_env_int("SLOW_THRESHOLD_MS", 1000, minimum=0),
            include_traceback=_env_bool("INCLUDE_TRACEBACK", False),
            enable_ui=_env_bool("ENABLE_UI", False),
        )
