"""MCP server exposing the Antijection node as a tool."""

import logging

from antijection_node.logging_config import configure_logging
from antijection_node.tools import mcp
from antijection_node.tools._service import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Entry point for the MCP server (stdio transport)."""
    configure_logging(get_settings().log_level)
    logger.info("Starting antijection-node MCP server")
    mcp.run()


if __name__ == "__main__":
    main()
