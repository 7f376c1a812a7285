"""cafe24-mcp - Cafe24 Admin API operations as schema-validated MCP tools."""

__version__ = "0.1.0"
