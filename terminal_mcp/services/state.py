"""Global state management for Terminal MCP."""

from terminal_mcp.config import Config
from terminal_mcp.services.registry import SessionRegistry

# Global state (initialized on first access)
_config: Config | None = None
_registry: SessionRegistry | None = None


def get_config() -> Config:
    """Get or create config."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def get_registry() -> SessionRegistry:
    """Get or create the session registry."""
    global _registry
    if _registry is None:
        config = get_config()
        _registry = SessionRegistry(
            max_sessions=config.max_sessions,
            max_history=config.max_history,
            aliases=config.aliases,
        )
    return _registry


def reset_state() -> None:
    """Reset global state for testing.

    Clears the singleton instances so tests start with fresh state.
    Should only be used in test fixtures.
    """
    global _config, _registry
    _config = None
    _registry = None


def set_config(config: Config) -> None:
    """Set the global config instance.

    Args:
        config: Config instance to use globally.
    """
    global _config
    _config = config


def set_registry(registry: SessionRegistry) -> None:
    """Set the global session registry.

    Args:
        registry: SessionRegistry instance to use globally.
    """
    global _registry
    _registry = registry
