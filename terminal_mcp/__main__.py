"""Entry point for terminal_mcp server."""

import logging

from terminal_mcp.server import build_http_middleware, mcp  # also configures logging
from terminal_mcp.services import get_config

logger = logging.getLogger(__name__)


def run_server() -> None:
    """Run the MCP server with configured transport."""
    config = get_config()

    if config.transport == "stdio":
        logger.info("Starting Terminal MCP server (transport=stdio)")
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting Terminal MCP server (transport=http, host=%s, port=%d)",
            config.http_host,
            config.http_port,
        )
        mcp.run(
            transport="http",
            host=config.http_host,
            port=config.http_port,
            middleware=build_http_middleware(config.settings),
        )


if __name__ == "__main__":
    run_server()
