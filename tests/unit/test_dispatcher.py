"""Tests for the tool dispatcher pipeline."""

from __future__ import annotations

import asyncio
import json
import re
from unittest.mock import patch

import httpx
import pytest

from cafe24_mcp.auth.credentials import StaticTokenSource
from cafe24_mcp.catalog import build_registry
from cafe24_mcp.core.errors import ErrorKind
from cafe24_mcp.http.base import Failure, Success
from cafe24_mcp.http.transport import TransportClient
from cafe24_mcp.schema.nodes import ObjectNode, StringNode
from cafe24_mcp.tools.base import ToolResult
from cafe24_mcp.tools.dispatcher import Dispatcher
from cafe24_mcp.tools.presenter import present
from cafe24_mcp.tools.registry import OperationRegistry

from tests.fixtures.operations import FakeExecutor, make_spec


def _dispatcher(*results: object) -> tuple[Dispatcher, FakeExecutor]:
    executor = FakeExecutor(*results)  # type: ignore[arg-type]
    return Dispatcher(build_registry(), executor), executor


# ── Happy path ──────────────────────────────────────────────────


class TestInvoke:
    async def test_success_pipeline(self):
        body = {"seo": {"meta_title": "Shoes"}}
        dispatcher, executor = _dispatcher(Success(body))
        result = await dispatcher.invoke("cafe24_retrieve_category_seo", {"category_no": 5})

        assert isinstance(result, ToolResult)
        assert result.is_error is False
        assert result.structured == body
        assert "Category SEO Settings for #5 (Shop #1)" in result.summary_text

        (call,) = executor.calls
        assert call.method == "GET"
        assert call.path == "/admin/categories/5/seo"
        assert call.headers == {"X-Cafe24-Shop-No": "1"}

    async def test_none_arguments_are_empty_object(self):
        dispatcher, executor = _dispatcher(Success({"app": {"version": "1"}}))
        result = await dispatcher.invoke("cafe24_get_app", None)
        assert result.is_error is False
        assert len(executor.calls) == 1

    async def test_api_failure_is_error_result(self):
        dispatcher, _ = _dispatcher(Failure(ErrorKind.API_ERROR, "Not Found", 404))
        result = await dispatcher.invoke("cafe24_get_customer", {"member_id": "ghost"})
        assert result.is_error is True
        assert result.structured is None
        assert "HTTP 404" in result.summary_text


# ── Validation short-circuits ───────────────────────────────────


class TestValidation:
    async def test_out_of_range_never_reaches_transport(self):
        dispatcher, executor = _dispatcher()
        result = await dispatcher.invoke("cafe24_list_brands", {"limit": 500})
        assert result.is_error is True
        assert result.summary_text == "Error: Invalid parameters - limit: must be <= 100"
        assert executor.calls == []

    async def test_unknown_field_names_the_field(self):
        dispatcher, executor = _dispatcher()
        result = await dispatcher.invoke(
            "cafe24_retrieve_category_seo",
            {"category_no": 5, "shop_no": 2, "extra_field": "x"},
        )
        assert result.is_error is True
        assert "extra_field" in result.summary_text
        assert executor.calls == []

    async def test_cross_field_rule(self):
        dispatcher, executor = _dispatcher()
        result = await dispatcher.invoke(
            "cafe24_create_order_memo",
            {"order_id": "o-1", "request": {"content": "c", "attach_type": "P"}},
        )
        assert result.is_error is True
        assert "product_list is required when attach_type is 'P'" in result.summary_text
        assert executor.calls == []

    async def test_non_object_arguments(self):
        dispatcher, _ = _dispatcher()
        result = await dispatcher.invoke("cafe24_get_app", ["not", "an", "object"])
        assert result.is_error is True
        assert "expected object" in result.summary_text


# ── Boundary faults ─────────────────────────────────────────────


class TestFaults:
    async def test_unknown_operation(self):
        dispatcher, executor = _dispatcher()
        result = await dispatcher.invoke("cafe24_does_not_exist", {})
        assert result.is_error is True
        assert result.summary_text == "Error: Unknown operation: cafe24_does_not_exist"
        assert executor.calls == []

    async def test_builder_defect_becomes_internal_error(self):
        registry = OperationRegistry()
        # Path token with no declared field: a declaration bug.
        registry.register(
            make_spec(
                path="/admin/things/{thing_no}",
                parameters=ObjectNode(fields={"name": StringNode(required=False)}),
            )
        )
        executor = FakeExecutor()
        with patch("cafe24_mcp.tools.dispatcher.present", wraps=present) as presented:
            result = await Dispatcher(registry.freeze(), executor).invoke("test_op", {})
        failure = presented.call_args.args[1]
        assert failure.kind is ErrorKind.INTERNAL_ERROR
        assert result.is_error is True
        assert re.fullmatch(
            r"Error: Internal error while handling the request \(ref [0-9a-f]{12}\)",
            result.summary_text,
        )
        assert "thing_no" not in result.summary_text
        assert executor.calls == []

    async def test_executor_crash_becomes_internal_error(self, caplog: pytest.LogCaptureFixture):
        class Exploding:
            async def execute(self, descriptor: object) -> object:
                raise RuntimeError("secret internals")

        dispatcher = Dispatcher(build_registry(), Exploding())  # type: ignore[arg-type]
        result = await dispatcher.invoke("cafe24_get_app", {})
        assert result.is_error is True
        assert "secret internals" not in result.summary_text
        assert "ref " in result.summary_text
        assert "secret internals" in caplog.text

    async def test_cancellation_propagates(self):
        class Hanging:
            async def execute(self, descriptor: object) -> object:
                await asyncio.sleep(3600)
                return Success(None)

        dispatcher = Dispatcher(build_registry(), Hanging())  # type: ignore[arg-type]
        task = asyncio.create_task(dispatcher.invoke("cafe24_get_app", {}))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task


# ── End to end with the real transport ──────────────────────────


class TestWithTransport:
    async def test_timeout_is_error_result(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        transport = TransportClient(
            "https://myshop.cafe24api.com/api/v2",
            StaticTokenSource("tok"),
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        async with transport:
            dispatcher = Dispatcher(build_registry(), transport)
            result = await dispatcher.invoke("cafe24_list_brands", {})
        assert result.is_error is True
        assert "Could not reach the Cafe24 API" in result.summary_text

    async def test_body_and_headers_on_the_wire(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"brand": {"brand_code": "B000000C"}})

        transport = TransportClient(
            "https://myshop.cafe24api.com/api/v2",
            StaticTokenSource("tok"),
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        async with transport:
            dispatcher = Dispatcher(build_registry(), transport)
            result = await dispatcher.invoke(
                "cafe24_create_brand", {"shop_no": 3, "request": {"brand_name": "Acme"}}
            )

        assert result.is_error is False
        assert "- **Brand Code**: B000000C" in result.summary_text
        request = seen[0]
        assert request.headers["X-Cafe24-Shop-No"] == "3"
        assert json.loads(request.read()) == {
            "request": {"brand_name": "Acme", "use_brand": "T"}
        }

    async def _send(
        self, name: str, args: dict, response: dict
    ) -> tuple[ToolResult, httpx.Request]:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=response)

        transport = TransportClient(
            "https://myshop.cafe24api.com/api/v2",
            StaticTokenSource("tok"),
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        async with transport:
            result = await Dispatcher(build_registry(), transport).invoke(name, args)
        return result, seen[0]

    async def test_flat_seo_update_is_wrapped_in_request(self):
        result, request = await self._send(
            "cafe24_update_category_seo",
            {"category_no": 5, "meta_title": "Shoes"},
            {"seo": {"meta_title": "Shoes"}},
        )
        assert result.is_error is False
        assert request.method == "PUT"
        assert request.url.path == "/api/v2/admin/categories/5/seo"
        assert request.headers["X-Cafe24-Shop-No"] == "1"
        assert json.loads(request.read()) == {"request": {"meta_title": "Shoes"}}

    async def test_flat_webhook_update_is_wrapped_in_request(self):
        result, request = await self._send(
            "cafe24_update_webhook_setting",
            {"reception_status": "T"},
            {"webhook": {"reception_status": "T"}},
        )
        assert result.is_error is False
        assert "- **Reception Status**: Activated" in result.summary_text
        assert json.loads(request.read()) == {"request": {"reception_status": "T"}}

    async def test_flat_kakaoalimtalk_update_is_wrapped_in_request(self):
        result, request = await self._send(
            "cafe24_update_kakaoalimtalk_setting",
            {"use_kakaoalimtalk": "F", "shop_no": 2},
            {"kakaoalimtalk": {"shop_no": 2, "use_kakaoalimtalk": "F"}},
        )
        assert result.is_error is False
        assert request.headers["X-Cafe24-Shop-No"] == "2"
        assert json.loads(request.read()) == {"request": {"use_kakaoalimtalk": "F"}}

    async def test_kakaosync_update_applies_defaults(self):
        _, request = await self._send(
            "cafe24_update_kakaosync_setting",
            {"rest_api_key": "rest", "javascript_key": "js"},
            {"kakaosync": {}},
        )
        assert json.loads(request.read()) == {
            "request": {
                "rest_api_key": "rest",
                "javascript_key": "js",
                "auto_login": "F",
                "use_signup_result_page": "F",
            }
        }

    async def test_customer_search_by_name(self):
        body = {
            "customers": [
                {"member_id": "kim01", "member_name": "Kim", "email": "k@x.kr"}
            ],
            "total": 42,
        }
        result, request = await self._send(
            "cafe24_list_customers", {"name": "Kim"}, body
        )
        assert result.is_error is False
        assert request.url.params["member_name"] == "Kim"
        assert "name" not in request.url.params
        assert "Found 42 customers (showing 1)" in result.summary_text

    async def test_customer_search_without_filters(self):
        result, request = await self._send(
            "cafe24_list_customers", {}, {"customers": [], "total": 0}
        )
        assert result.is_error is False
        assert dict(request.url.params) == {"limit": "20", "offset": "0"}

    async def test_product_flags_sent_as_t_f(self):
        _, request = await self._send(
            "cafe24_list_products",
            {"selling": True, "display": False},
            {"products": []},
        )
        assert request.url.params["selling"] == "T"
        assert request.url.params["display"] == "F"
