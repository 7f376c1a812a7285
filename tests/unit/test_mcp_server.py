"""Tests for the MCP server tools."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

from mcp.types import CallToolResult, TextContent

from cafe24_mcp.catalog import build_registry
from cafe24_mcp.config.schema import Cafe24Config
from cafe24_mcp.http.base import Success
from cafe24_mcp.mcp.server import (
    SERVER_NAME,
    _get_tools,
    _to_call_result,
    create_server,
    handle_call,
    run_server,
)
from cafe24_mcp.tools.base import ToolResult
from cafe24_mcp.tools.dispatcher import Dispatcher

from tests.fixtures.operations import FakeExecutor

# ── Tool schemas ─────────────────────────────────────────────────


class TestToolSchemas:
    """Verify that tool definitions mirror the catalog."""

    def test_one_tool_per_operation(self) -> None:
        registry = build_registry()
        tools = _get_tools(registry)
        assert [t.name for t in tools] == registry.list_names()

    def test_input_schema(self) -> None:
        tools = _get_tools(build_registry())
        seo = next(t for t in tools if t.name == "cafe24_retrieve_category_seo")
        schema = seo.inputSchema
        assert schema["type"] == "object"
        assert schema["required"] == ["category_no"]
        assert schema["additionalProperties"] is False
        assert schema["properties"]["shop_no"]["default"] == 1

    def test_annotations_from_side_effects(self) -> None:
        tools = {t.name: t for t in _get_tools(build_registry())}

        listing = tools["cafe24_list_brands"].annotations
        assert listing is not None
        assert listing.readOnlyHint is True
        assert listing.destructiveHint is False

        deleting = tools["cafe24_delete_brand"].annotations
        assert deleting is not None
        assert deleting.readOnlyHint is False
        assert deleting.destructiveHint is True
        assert deleting.idempotentHint is True

    def test_title(self) -> None:
        tools = {t.name: t for t in _get_tools(build_registry())}
        assert tools["cafe24_get_app"].title == "Get Cafe24 App Information"


# ── Result conversion ────────────────────────────────────────────


class TestCallResult:
    def test_success_with_object(self) -> None:
        result = _to_call_result(ToolResult("## Done", {"a": 1}))
        assert isinstance(result, CallToolResult)
        assert result.isError is False
        assert result.structuredContent == {"a": 1}
        assert result.content == [TextContent(type="text", text="## Done")]

    def test_non_object_structured_is_wrapped(self) -> None:
        result = _to_call_result(ToolResult("## Done", [1, 2]))
        assert result.structuredContent == {"result": [1, 2]}

    def test_error(self) -> None:
        result = _to_call_result(ToolResult("Error: nope", None, is_error=True))
        assert result.isError is True
        assert result.structuredContent is None


# ── call_tool routing ────────────────────────────────────────────


class TestCallToolRouting:
    async def test_delegates_to_dispatcher(self) -> None:
        executor = FakeExecutor(Success({"app": {"version": "3"}}))
        dispatcher = Dispatcher(build_registry(), executor)
        result = await handle_call(dispatcher, "cafe24_get_app", {})
        assert result.isError is False
        assert result.structuredContent == {"app": {"version": "3"}}
        assert len(executor.calls) == 1

    async def test_validation_error_is_tool_error(self) -> None:
        executor = FakeExecutor()
        dispatcher = Dispatcher(build_registry(), executor)
        result = await handle_call(dispatcher, "cafe24_list_brands", {"limit": 0})
        assert result.isError is True
        assert "limit" in result.content[0].text  # type: ignore[union-attr]
        assert executor.calls == []

    async def test_unknown_tool(self) -> None:
        dispatcher = Dispatcher(build_registry(), FakeExecutor())
        result = await handle_call(dispatcher, "nope", None)
        assert result.isError is True

    def test_create_server(self) -> None:
        server = create_server(Dispatcher(build_registry(), FakeExecutor()))
        assert server.name == SERVER_NAME


class TestRunServer:
    async def test_serves_over_stdio(self) -> None:
        config = Cafe24Config(
            mall={"mall_id": "myshop"},  # type: ignore[arg-type]
            auth={"access_token": "tok"},  # type: ignore[arg-type]
        )
        stdio = MagicMock()
        stdio.return_value.__aenter__ = AsyncMock(return_value=("read", "write"))
        stdio.return_value.__aexit__ = AsyncMock(return_value=None)

        with (
            patch("cafe24_mcp.mcp.server.stdio_server", stdio),
            patch("mcp.server.Server.run", new_callable=AsyncMock) as run,
        ):
            await run_server(config)

        run.assert_awaited_once()
        assert run.await_args.args[:2] == ("read", "write")
