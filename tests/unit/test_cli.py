"""Tests for the CLI commands: argument parsing, output formatting, errors."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import patch
from urllib.parse import parse_qs

import httpx
import pytest
from click.testing import CliRunner

from cafe24_mcp.cli.app import cli
from cafe24_mcp.config.schema import Cafe24Config
from cafe24_mcp.core.errors import ConfigError
from cafe24_mcp.tools.base import ToolResult


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_logging_setup() -> Any:
    with patch("cafe24_mcp.cli.app.setup_logging") as mock:
        yield mock


def _config() -> Cafe24Config:
    return Cafe24Config(
        mall={"mall_id": "myshop"},  # type: ignore[arg-type]
        auth={"access_token": "tok"},  # type: ignore[arg-type]
    )


def _returning(value: Any) -> Any:
    """asyncio.run stand-in that discards the coroutine and returns *value*."""

    def _run(coro: Any) -> Any:
        coro.close()
        return value

    return _run


# ── CLI group ────────────────────────────────────────────────────


class TestCliGroup:
    def test_no_command_shows_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli)
        assert result.exit_code == 0
        assert "Cafe24 Admin API tools" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "cafe24-mcp" in result.output
        assert "0.1.0" in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "serve" in result.output
        assert "tools" in result.output
        assert "call" in result.output
        assert "auth" in result.output


# ── tools ────────────────────────────────────────────────────────


class TestToolsCommand:
    def test_lists_operations(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["tools"])
        assert result.exit_code == 0
        assert "cafe24_list_brands" in result.output
        assert "cafe24_delete_order_memo" in result.output
        assert "destructive" in result.output


# ── call ─────────────────────────────────────────────────────────


class TestCallCommand:
    def test_missing_name(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["call"])
        assert result.exit_code != 0
        assert "Missing argument" in result.output

    def test_invalid_json_args(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["call", "cafe24_get_app", "--args", "{nope"])
        assert result.exit_code == 2
        assert "not valid JSON" in result.output

    def test_args_must_be_object(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["call", "cafe24_get_app", "--args", "[1]"])
        assert result.exit_code == 2
        assert "must be a JSON object" in result.output

    @patch("cafe24_mcp.cli.app.asyncio.run")
    @patch("cafe24_mcp.cli.app.load_config")
    def test_prints_summary(self, mock_config: Any, mock_run: Any, runner: CliRunner) -> None:
        mock_config.return_value = _config()
        mock_run.side_effect = _returning(
            ToolResult("## App Information\n\n- **Version**: 3", {"app": {"version": "3"}})
        )

        result = runner.invoke(cli, ["call", "cafe24_get_app"])

        assert result.exit_code == 0
        assert "- **Version**: 3" in result.output

    @patch("cafe24_mcp.cli.app.asyncio.run")
    @patch("cafe24_mcp.cli.app.load_config")
    def test_json_output(self, mock_config: Any, mock_run: Any, runner: CliRunner) -> None:
        mock_config.return_value = _config()
        mock_run.side_effect = _returning(ToolResult("## x", {"count": 4}))

        result = runner.invoke(cli, ["call", "cafe24_count_brands", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"count": 4}

    @patch("cafe24_mcp.cli.app.asyncio.run")
    @patch("cafe24_mcp.cli.app.load_config")
    def test_error_result_exits_1(
        self, mock_config: Any, mock_run: Any, runner: CliRunner
    ) -> None:
        mock_config.return_value = _config()
        mock_run.side_effect = _returning(
            ToolResult("Error: Invalid parameters - limit: must be <= 100", None, is_error=True)
        )

        result = runner.invoke(
            cli, ["call", "cafe24_list_brands", "--args", '{"limit": 500}']
        )

        assert result.exit_code == 1

    @patch("cafe24_mcp.cli.app.load_config")
    def test_config_error(self, mock_config: Any, runner: CliRunner) -> None:
        mock_config.side_effect = ConfigError("Invalid TOML in x")
        result = runner.invoke(cli, ["call", "cafe24_get_app"])
        assert result.exit_code == 1

    @patch("cafe24_mcp.cli.app.load_config")
    def test_requires_mall(self, mock_config: Any, runner: CliRunner) -> None:
        mock_config.return_value = Cafe24Config()
        result = runner.invoke(cli, ["call", "cafe24_get_app"])
        assert result.exit_code == 1

    @patch("cafe24_mcp.cli.app.load_config")
    def test_end_to_end_validation_error(
        self, mock_config: Any, runner: CliRunner
    ) -> None:
        # Validation fails before any request, so the real pipeline runs offline.
        mock_config.return_value = _config()
        result = runner.invoke(
            cli, ["call", "cafe24_list_brands", "--args", '{"limit": 500}']
        )
        assert result.exit_code == 1
        assert "limit: must be <= 100" in result.output


# ── serve ────────────────────────────────────────────────────────


class TestServeCommand:
    @patch("cafe24_mcp.cli.app.asyncio.run")
    @patch("cafe24_mcp.cli.app.load_config")
    def test_runs_server(self, mock_config: Any, mock_run: Any, runner: CliRunner) -> None:
        mock_config.return_value = _config()
        mock_run.side_effect = _returning(None)
        result = runner.invoke(cli, ["serve"])
        assert result.exit_code == 0
        mock_run.assert_called_once()


# ── auth ─────────────────────────────────────────────────────────


def _oauth_config(**auth: Any) -> Cafe24Config:
    return Cafe24Config(
        mall={"mall_id": "myshop"},  # type: ignore[arg-type]
        auth={"client_id": "cid", "client_secret": "secret", **auth},  # type: ignore[arg-type]
    )


class _TokenEndpoint:
    def __init__(self, status: int = 200, body: Any = None) -> None:
        self.status = status
        self.body = body if body is not None else {
            "access_token": "acc-1",
            "refresh_token": "ref-1",
            "expires_at": "2030-01-01T00:00:00+00:00",
        }
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, json=self.body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    def form(self) -> dict[str, list[str]]:
        return parse_qs(self.requests[0].content.decode())


class TestAuthCommand:
    @patch("cafe24_mcp.cli.app.load_config")
    def test_exchanges_code(self, mock_config: Any, runner: CliRunner) -> None:
        mock_config.return_value = _oauth_config()
        endpoint = _TokenEndpoint()
        with patch("cafe24_mcp.cli.app._http_client", return_value=endpoint.client()):
            result = runner.invoke(cli, ["auth", "--code", "abc"])

        assert result.exit_code == 0, result.output
        request = endpoint.requests[0]
        assert str(request.url) == "https://myshop.cafe24api.com/api/v2/oauth/token"
        assert endpoint.form() == {
            "grant_type": ["authorization_code"],
            "code": ["abc"],
            "redirect_uri": ["http://localhost:8787/cafe24/oauth/callback"],
        }
        assert "Access token: acc-1" in result.output
        assert "Expires at: 2030-01-01T00:00:00+00:00" in result.output
        assert "CAFE24_REFRESH_TOKEN=ref-1" in result.output

    @patch("cafe24_mcp.cli.app.load_config")
    def test_redirect_uri_option(self, mock_config: Any, runner: CliRunner) -> None:
        mock_config.return_value = _oauth_config()
        endpoint = _TokenEndpoint()
        with patch("cafe24_mcp.cli.app._http_client", return_value=endpoint.client()):
            result = runner.invoke(
                cli,
                ["auth", "--code", "abc", "--redirect-uri", "https://app.example.com/cb"],
            )

        assert result.exit_code == 0, result.output
        assert endpoint.form()["redirect_uri"] == ["https://app.example.com/cb"]

    @patch("cafe24_mcp.cli.app.load_config")
    def test_prompts_with_authorize_url(self, mock_config: Any, runner: CliRunner) -> None:
        mock_config.return_value = _oauth_config(state="xyz")
        endpoint = _TokenEndpoint()
        redirected = "http://localhost:8787/cafe24/oauth/callback?code=from-url&state=xyz"
        with patch("cafe24_mcp.cli.app._http_client", return_value=endpoint.client()):
            result = runner.invoke(cli, ["auth"], input=redirected + "\n")

        assert result.exit_code == 0, result.output
        assert "https://myshop.cafe24api.com/api/v2/oauth/authorize?" in result.output
        assert "scope=mall.read_application" in result.output
        assert "state=xyz" in result.output
        assert endpoint.form()["code"] == ["from-url"]

    @patch("cafe24_mcp.cli.app.load_config")
    def test_state_mismatch_rejected(self, mock_config: Any, runner: CliRunner) -> None:
        mock_config.return_value = _oauth_config(state="xyz")
        with patch("cafe24_mcp.cli.app._http_client") as client:
            result = runner.invoke(
                cli, ["auth", "--code", "http://localhost/cb?code=c&state=other"]
            )

        assert result.exit_code == 2
        assert "state does not match" in result.output
        client.assert_not_called()

    @patch("cafe24_mcp.cli.app.load_config")
    def test_refused_consent(self, mock_config: Any, runner: CliRunner) -> None:
        mock_config.return_value = _oauth_config()
        result = runner.invoke(
            cli, ["auth", "--code", "http://localhost/cb?error=access_denied"]
        )
        assert result.exit_code == 2
        assert "access_denied" in result.output

    @patch("cafe24_mcp.cli.app.load_config")
    def test_rejected_code(self, mock_config: Any, runner: CliRunner) -> None:
        mock_config.return_value = _oauth_config()
        endpoint = _TokenEndpoint(status=400, body={"error": "invalid_grant"})
        with patch("cafe24_mcp.cli.app._http_client", return_value=endpoint.client()):
            result = runner.invoke(cli, ["auth", "--code", "stale"])

        assert result.exit_code == 1
        assert "Invalid authorization code" in result.output

    @patch("cafe24_mcp.cli.app.load_config")
    def test_requires_oauth_client(self, mock_config: Any, runner: CliRunner) -> None:
        mock_config.return_value = _config()
        result = runner.invoke(cli, ["auth", "--code", "abc"])
        assert result.exit_code == 1
        assert "CAFE24_CLIENT_ID" in result.output
