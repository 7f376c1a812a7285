"""MCP server exposing the operation catalog."""
