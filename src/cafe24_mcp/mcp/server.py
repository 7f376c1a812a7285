"""MCP server for the Cafe24 Admin API tools."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool, ToolAnnotations

from cafe24_mcp import __version__

if TYPE_CHECKING:
    from cafe24_mcp.config.schema import Cafe24Config
    from cafe24_mcp.tools.base import ToolResult
    from cafe24_mcp.tools.dispatcher import Dispatcher
    from cafe24_mcp.tools.registry import OperationRegistry

logger = logging.getLogger(__name__)

SERVER_NAME = "cafe24-admin"


def _get_tools(registry: OperationRegistry) -> list[Tool]:
    """Define the MCP tools from the registered operations."""
    tools = []
    for definition in registry.list_definitions():
        hints = definition.side_effects
        tools.append(
            Tool(
                name=definition.name,
                title=definition.title,
                description=definition.description,
                inputSchema=definition.parameters_schema,
                annotations=ToolAnnotations(
                    title=definition.title,
                    readOnlyHint=hints.read_only,
                    destructiveHint=hints.destructive,
                    idempotentHint=hints.idempotent,
                    openWorldHint=hints.open_world,
                ),
            )
        )
    return tools


def _to_call_result(result: ToolResult) -> CallToolResult:
    """Convert a dispatcher result into the MCP wire shape.

    ``structuredContent`` must be an object, so other values are wrapped
    under ``"result"``.
    """
    structured: dict[str, Any] | None
    if result.structured is None or isinstance(result.structured, dict):
        structured = result.structured
    else:
        structured = {"result": result.structured}
    return CallToolResult(
        content=[TextContent(type="text", text=result.summary_text)],
        structuredContent=structured,
        isError=result.is_error,
    )


async def handle_call(
    dispatcher: Dispatcher, name: str, arguments: dict[str, Any] | None
) -> CallToolResult:
    """Run one tool call through the dispatcher."""
    result = await dispatcher.invoke(name, arguments)
    return _to_call_result(result)


def create_server(dispatcher: Dispatcher) -> Server:
    """Build an MCP server bound to *dispatcher*.

    Input validation is left to the dispatcher so that every rejection
    carries the same message format.
    """
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
    async def list_tools() -> list[Tool]:
        """List available MCP tools."""
        return _get_tools(dispatcher.registry)

    @server.call_tool(validate_input=False)  # type: ignore[untyped-decorator]
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> CallToolResult:
        """Handle tool calls."""
        return await handle_call(dispatcher, name, arguments)

    return server


async def run_server(config: Cafe24Config) -> None:
    """Start the MCP server on stdio."""
    from cafe24_mcp.auth.credentials import credential_source_from_config
    from cafe24_mcp.catalog import build_registry
    from cafe24_mcp.http.transport import TransportClient
    from cafe24_mcp.tools.dispatcher import Dispatcher

    registry = build_registry()
    credentials = credential_source_from_config(config)
    async with TransportClient.from_config(config, credentials) as transport:
        server = create_server(Dispatcher(registry, transport))
        logger.info(
            "Serving %d tools for mall %r over stdio",
            len(registry),
            config.mall.mall_id,
        )
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
