"""Configuration module for Terminal MCP.

- Config: Main configuration class (settings plus alias table)
- Settings: Environment variable configuration
"""

from terminal_mcp.config.main import Config
from terminal_mcp.config.settings import Settings

__all__ = ["Config", "Settings"]
