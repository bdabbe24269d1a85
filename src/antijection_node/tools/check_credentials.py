"""Credential check MCP tool."""

from antijection_node.client import AntijectionClient
from antijection_node.tools._app import mcp
from antijection_node.tools._error_handler import handle_tool_errors
from antijection_node.tools._service import get_credentials


@mcp.tool
@handle_tool_errors
def check_credentials() -> str:
    """Verify that the configured Antijection API key is accepted."""
    credentials = get_credentials()
    with AntijectionClient(credentials) as client:
        result = client.test_credentials()
    if result.ok:
        return f"Credentials OK ({credentials.base_url})"
    return f"Credential check failed: {result.message}"
