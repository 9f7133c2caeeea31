"""Terminal MCP: run shell commands on the host over MCP."""

__version__ = "0.1.0"
