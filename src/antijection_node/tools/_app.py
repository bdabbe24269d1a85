"""Shared FastMCP application instance."""

from fastmcp import FastMCP

mcp = FastMCP(name="antijection-node")
