"""Main CLI application.

Click commands for cafe24-mcp: serve, tools, call, auth.
"""

from __future__ import annotations

import asyncio
import json as json_mod
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import click
import httpx
from rich.console import Console
from rich.table import Table

from cafe24_mcp import __version__
from cafe24_mcp.config.loader import load_config
from cafe24_mcp.core.errors import Cafe24Error, ConfigError
from cafe24_mcp.core.logging_setup import setup_logging

if TYPE_CHECKING:
    from cafe24_mcp.auth.credentials import TokenData
    from cafe24_mcp.config.schema import Cafe24Config
    from cafe24_mcp.tools.base import SideEffectProfile, ToolResult


# ── Helpers ──────────────────────────────────────────────────────


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _load_config(config_path: str | None) -> Cafe24Config:
    """Load config with user-friendly error handling."""
    try:
        return load_config(path=config_path)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy


def _require_mall(config: Cafe24Config) -> None:
    """Exit unless the config identifies a mall to call."""
    if not config.mall.mall_id and not config.http.base_url:
        _error(
            "No mall configured. Set CAFE24_MALL_ID or [mall] mall_id "
            "in the config file."
        )


def _parse_args(raw: str | None) -> dict[str, Any]:
    """Parse the ``--args`` JSON object."""
    if raw is None:
        return {}
    try:
        parsed = json_mod.loads(raw)
    except json_mod.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e.msg}", param_hint="--args") from e
    if not isinstance(parsed, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--args")
    return parsed


def _hints(profile: SideEffectProfile) -> str:
    """Short label for a side-effect profile."""
    labels = []
    if profile.read_only:
        labels.append("read-only")
    if profile.destructive:
        labels.append("destructive")
    if profile.idempotent:
        labels.append("idempotent")
    return ", ".join(labels) or "-"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="cafe24-mcp")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """cafe24-mcp - Cafe24 Admin API tools for AI agents.

    Serve the operation catalog over MCP or call single operations.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ── serve ────────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Start the MCP server on stdio."""
    from cafe24_mcp.mcp.server import run_server

    config = _load_config(ctx.obj["config_path"])
    setup_logging(config.logging, verbose=ctx.obj["verbose"])
    _require_mall(config)
    try:
        asyncio.run(run_server(config))
    except Cafe24Error as e:
        _error(str(e))


# ── tools ────────────────────────────────────────────────────────


@cli.command()
def tools() -> None:
    """List the available operations."""
    from cafe24_mcp.catalog import build_registry

    registry = build_registry()
    table = Table(title=f"Cafe24 tools ({len(registry)})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Hints", style="dim")
    for definition in registry.list_definitions():
        table.add_row(definition.name, definition.title, _hints(definition.side_effects))
    Console().print(table)


# ── call ─────────────────────────────────────────────────────────


@cli.command()
@click.argument("name")
@click.option("--args", "raw_args", default=None, help="Arguments as a JSON object.")
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print structured output as JSON instead of the summary.",
)
@click.pass_context
def call(ctx: click.Context, name: str, raw_args: str | None, as_json: bool) -> None:
    """Invoke one operation by NAME and print the result."""
    arguments = _parse_args(raw_args)
    config = _load_config(ctx.obj["config_path"])
    setup_logging(config.logging, verbose=ctx.obj["verbose"])
    _require_mall(config)

    try:
        result = asyncio.run(_call_async(config, name, arguments))
    except Cafe24Error as e:
        _error(str(e))
        return

    if as_json and not result.is_error:
        click.echo(json_mod.dumps(result.structured, indent=2, ensure_ascii=False))
    else:
        click.echo(result.summary_text, err=result.is_error)
    if result.is_error:
        sys.exit(1)


async def _call_async(
    config: Cafe24Config, name: str, arguments: dict[str, Any]
) -> ToolResult:
    """Async implementation for the call command."""
    from cafe24_mcp.auth.credentials import credential_source_from_config
    from cafe24_mcp.catalog import build_registry
    from cafe24_mcp.http.transport import TransportClient
    from cafe24_mcp.tools.dispatcher import Dispatcher

    credentials = credential_source_from_config(config)
    async with TransportClient.from_config(config, credentials) as transport:
        dispatcher = Dispatcher(build_registry(), transport)
        return await dispatcher.invoke(name, arguments)


# ── auth ─────────────────────────────────────────────────────────


def _http_client(config: Cafe24Config) -> httpx.AsyncClient:
    """HTTP client for the token endpoint."""
    return httpx.AsyncClient(timeout=config.http.timeout)


def _extract_code(raw: str, expected_state: str | None) -> str:
    """Accept either a bare code or the URL the browser was redirected to."""
    raw = raw.strip()
    if "://" not in raw and not raw.startswith("?"):
        return raw

    params = httpx.URL(raw).params
    if "error" in params:
        detail = params.get("error_description") or params["error"]
        msg = f"authorization was refused: {detail}"
        raise click.BadParameter(msg, param_hint="--code")
    if expected_state and params.get("state") != expected_state:
        msg = "state does not match the configured OAuth state"
        raise click.BadParameter(msg, param_hint="--code")
    code = params.get("code")
    if not code:
        raise click.BadParameter("no code parameter in the URL", param_hint="--code")
    return code


@cli.command()
@click.option(
    "--code",
    default=None,
    help="Authorization code, or the full URL the browser was redirected to.",
)
@click.option(
    "--redirect-uri",
    default=None,
    help="Redirect URI registered for the app (defaults to [auth] redirect_uri).",
)
@click.pass_context
def auth(ctx: click.Context, code: str | None, redirect_uri: str | None) -> None:
    """Authorize the app for a mall and print the issued tokens.

    Without --code, prints the consent page URL and asks for the code
    that approving it produces.
    """
    from cafe24_mcp.auth.credentials import authorize_url
    from cafe24_mcp.config.schema import DEFAULT_SCOPE

    config = _load_config(ctx.obj["config_path"])
    setup_logging(config.logging, verbose=ctx.obj["verbose"])
    settings = config.auth
    if not config.mall.mall_id:
        _error(
            "No mall configured. Set CAFE24_MALL_ID or [mall] mall_id "
            "in the config file."
        )
    if not (settings.client_id and settings.client_secret):
        _error(
            "No OAuth client configured. Set CAFE24_CLIENT_ID and "
            "CAFE24_CLIENT_SECRET."
        )
    assert settings.client_id is not None

    redirect = redirect_uri or settings.redirect_uri
    if code is None:
        url = authorize_url(
            config.mall.mall_id,
            settings.client_id,
            redirect,
            settings.scope or DEFAULT_SCOPE,
            settings.state,
        )
        click.echo("Open this URL in a browser and approve the app:\n")
        click.echo(url)
        code = click.prompt("\nAuthorization code or redirected URL")
    code = _extract_code(code, settings.state)

    try:
        tokens = asyncio.run(_exchange_async(config, code, redirect))
    except Cafe24Error as e:
        _error(str(e))
        return

    click.echo(f"Authorized mall {config.mall.mall_id}.")
    click.echo(f"Access token: {tokens.access_token}")
    if tokens.expires_at is not None:
        expires = datetime.fromtimestamp(tokens.expires_at, tz=timezone.utc)
        click.echo(f"Expires at: {expires.isoformat(timespec='seconds')}")
    if tokens.refresh_token:
        click.echo(f"Refresh token: {tokens.refresh_token}")
        click.echo("\nTo keep the server authorized, export:")
        click.echo(f"  {settings.refresh_token_env}={tokens.refresh_token}")


async def _exchange_async(
    config: Cafe24Config, code: str, redirect_uri: str
) -> TokenData:
    """Async implementation for the auth command."""
    from cafe24_mcp.auth.credentials import exchange_authorization_code

    settings = config.auth
    assert settings.client_id is not None and settings.client_secret is not None
    async with _http_client(config) as client:
        return await exchange_authorization_code(
            config.mall.mall_id,
            settings.client_id,
            settings.client_secret,
            code,
            redirect_uri,
            client=client,
            timeout=config.http.timeout,
        )
