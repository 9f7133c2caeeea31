"""Application configuration.

Combines environment settings with the terminal alias table.
"""

import logging
from dataclasses import dataclass, field

from terminal_mcp.config.settings import Settings
from terminal_mcp.utils.aliases import DEFAULT_ALIASES, parse_aliases

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Terminal MCP configuration."""

    settings: Settings = field(default_factory=Settings)
    aliases: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ALIASES))

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment.

        ``TERMINAL_ALIASES`` entries are layered over the default alias
        table. When ``TERMINAL_ENABLE_ALIASES`` is false the table is empty.

        Returns:
            Configured instance
        """
        settings = Settings.from_env()

        aliases: dict[str, str] = {}
        if settings.enable_aliases:
            aliases = dict(DEFAULT_ALIASES)
            aliases.update(parse_aliases(settings.aliases_raw))

        logger.debug(
            "Config initialized: transport=%s, max_sessions=%d, "
            "max_history=%d, aliases=%d",
            settings.transport,
            settings.max_sessions,
            settings.max_history,
            len(aliases),
        )
        return cls(settings=settings, aliases=aliases)

    # Convenience accessors for commonly used settings
    @property
    def transport(self) -> str:
        return self.settings.transport

    @property
    def http_host(self) -> str:
        return self.settings.http_host

    @property
    def http_port(self) -> int:
        return self.settings.http_port

    @property
    def max_sessions(self) -> int:
        return self.settings.max_sessions

    @property
    def max_history(self) -> int:
        return self.settings.max_history

    @property
    def enable_ui(self) -> bool:
        return self.settings.enable_ui
