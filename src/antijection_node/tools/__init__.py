"""MCP tools exposing the Antijection node."""

# isort: skip_file

from antijection_node.tools._app import mcp

# Import tool modules to trigger registration via decorators
from antijection_node.tools import check_credentials as _check_credentials  # noqa: F401
from antijection_node.tools import detect_prompt as _detect_prompt  # noqa: F401

__all__ = ["mcp"]
