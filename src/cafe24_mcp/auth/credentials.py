"""Credential sources for the admin API.

All sources implement the ``CredentialSource`` protocol. The transport
awaits ``get_token()`` before every request; any failure there must be
raised as :class:`~cafe24_mcp.core.errors.AuthError`.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx

from cafe24_mcp.core.errors import AuthError

if TYPE_CHECKING:
    from collections.abc import Callable

    from cafe24_mcp.config.schema import Cafe24Config

logger = logging.getLogger(__name__)

# Refresh this many seconds before the advertised expiry.
_EXPIRY_SKEW = 60.0


@runtime_checkable
class CredentialSource(Protocol):
    """Supplies a bearer token for outbound calls."""

    async def get_token(self) -> str:
        """Return a usable access token.

        Raises:
            AuthError: If no token can be produced.
        """
        ...


@dataclass(slots=True)
class TokenData:
    """Tokens from the OAuth token endpoint."""

    access_token: str
    refresh_token: str | None = None
    expires_at: float | None = None  # epoch seconds


class StaticTokenSource:
    """A fixed access token, e.g. from ``CAFE24_ACCESS_TOKEN``."""

    def __init__(self, token: str | None) -> None:
        self._token = token or ""

    async def get_token(self) -> str:
        if not self._token:
            msg = "CAFE24_ACCESS_TOKEN is not set and no OAuth client is configured"
            raise AuthError(msg)
        return self._token


def token_url(mall_id: str) -> str:
    return f"https://{mall_id}.cafe24api.com/api/v2/oauth/token"


def authorize_url(
    mall_id: str,
    client_id: str,
    redirect_uri: str,
    scope: str,
    state: str | None = None,
) -> str:
    """Consent page URL. Approving it redirects to *redirect_uri* with ``?code=``."""
    params = {
        "response_type": "code",
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "scope": scope,
    }
    if state:
        params["state"] = state
    base = f"https://{mall_id}.cafe24api.com/api/v2/oauth/authorize"
    return str(httpx.URL(base, params=params))


def _basic_auth(client_id: str, client_secret: str) -> str:
    encoded = base64.b64encode(f"{client_id}:{client_secret}".encode()).decode()
    return f"Basic {encoded}"


def _parse_expiry(data: dict[str, Any], now: float) -> float | None:
    """Work out the absolute expiry from a token response.

    The endpoint reports either ``expires_in`` (seconds) or
    ``expires_at`` (ISO timestamp).
    """
    expires_in = data.get("expires_in")
    if isinstance(expires_in, (int, float)) and not isinstance(expires_in, bool):
        return now + float(expires_in)
    expires_at = data.get("expires_at")
    if isinstance(expires_at, (int, float)) and not isinstance(expires_at, bool):
        return now + float(expires_at)
    if isinstance(expires_at, str):
        try:
            return datetime.fromisoformat(expires_at).timestamp()
        except ValueError:
            logger.debug("Unparseable expires_at in token response: %s", expires_at)
    return None


async def _post_token_form(
    url: str,
    form: dict[str, str],
    client_id: str,
    client_secret: str,
    client: httpx.AsyncClient | None,
    timeout: float,
) -> httpx.Response:
    headers = {
        "Content-Type": "application/x-www-form-urlencoded",
        "Accept": "application/json",
        "Authorization": _basic_auth(client_id, client_secret),
    }
    if client is not None:
        return await client.post(url, data=form, headers=headers, timeout=timeout)
    async with httpx.AsyncClient(timeout=timeout) as owned:
        return await owned.post(url, data=form, headers=headers)


def _token_from_response(
    response: httpx.Response,
    now: float,
    fallback_refresh: str | None = None,
) -> TokenData:
    try:
        data = response.json()
    except ValueError as e:
        msg = "Token endpoint returned a non-JSON body"
        raise AuthError(msg) from e
    if not isinstance(data, dict) or not data.get("access_token"):
        msg = "Token endpoint response has no access_token"
        raise AuthError(msg)
    return TokenData(
        access_token=str(data["access_token"]),
        refresh_token=data.get("refresh_token") or fallback_refresh,
        expires_at=_parse_expiry(data, now),
    )


async def exchange_authorization_code(
    mall_id: str,
    client_id: str,
    client_secret: str,
    code: str,
    redirect_uri: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = 30.0,
    clock: Callable[[], float] = time.time,
) -> TokenData:
    """Trade an authorization code for tokens (``authorization_code`` grant).

    Raises:
        AuthError: With a status-specific message on rejection, or on
            network failure.
    """
    form = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": redirect_uri,
    }
    try:
        response = await _post_token_form(
            token_url(mall_id), form, client_id, client_secret, client, timeout
        )
    except httpx.HTTPError as e:
        msg = "Network error during OAuth token exchange"
        raise AuthError(msg) from e

    if response.status_code >= 400:
        messages = {
            400: "Bad Request: Invalid authorization code or redirect URI",
            401: "Unauthorized: Invalid client ID or client secret",
            403: "Forbidden: Access denied",
        }
        msg = messages.get(
            response.status_code,
            f"OAuth token exchange failed with status {response.status_code}",
        )
        raise AuthError(msg)

    return _token_from_response(response, clock())


class OAuthTokenSource:
    """Access token kept fresh with the ``refresh_token`` grant.

    Without a refresh token, a one-time ``authorization_code`` is
    exchanged on first use and the tokens it yields seed the source.
    Concurrent callers that find the token expired share one refresh.
    """

    def __init__(
        self,
        mall_id: str,
        client_id: str,
        client_secret: str,
        refresh_token: str | None = None,
        *,
        access_token: str | None = None,
        expires_at: float | None = None,
        authorization_code: str | None = None,
        redirect_uri: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._mall_id = mall_id
        self._client_id = client_id
        self._client_secret = client_secret
        self._client = client
        self._timeout = timeout
        self._clock = clock
        self._authorization_code = authorization_code
        self._redirect_uri = redirect_uri or ""
        self._lock = asyncio.Lock()
        self._tokens: TokenData | None = None
        if access_token:
            self._tokens = TokenData(access_token, refresh_token, expires_at)
        elif refresh_token:
            self._tokens = TokenData("", refresh_token, 0.0)

    @property
    def tokens(self) -> TokenData | None:
        return self._tokens

    def _is_valid(self) -> bool:
        tokens = self._tokens
        if tokens is None or not tokens.access_token:
            return False
        if tokens.expires_at is None:
            return True
        return self._clock() < tokens.expires_at - _EXPIRY_SKEW

    async def get_token(self) -> str:
        if self._is_valid():
            assert self._tokens is not None
            return self._tokens.access_token

        async with self._lock:
            if not self._is_valid():
                await self._refresh()
            assert self._tokens is not None
            return self._tokens.access_token

    async def _refresh(self) -> None:
        refresh = self._tokens.refresh_token if self._tokens else None
        if not refresh:
            if self._authorization_code:
                await self._exchange_code()
                return
            msg = (
                "No refresh token available. Run `cafe24-mcp auth` or set "
                "CAFE24_AUTHORIZATION_CODE to authorize the app."
            )
            raise AuthError(msg)

        logger.info("Refreshing access token for mall %s", self._mall_id)
        form = {"grant_type": "refresh_token", "refresh_token": refresh}
        try:
            response = await _post_token_form(
                token_url(self._mall_id),
                form,
                self._client_id,
                self._client_secret,
                self._client,
                self._timeout,
            )
        except httpx.HTTPError as e:
            msg = f"Failed to refresh token: {e.__class__.__name__}"
            raise AuthError(msg) from e

        if response.status_code == 401:
            msg = "Invalid or expired refresh token. Please authenticate again."
            raise AuthError(msg)
        if response.status_code >= 400:
            msg = f"Failed to refresh token (HTTP {response.status_code})"
            raise AuthError(msg)

        self._tokens = _token_from_response(response, self._clock(), refresh)

    async def _exchange_code(self) -> None:
        code, self._authorization_code = self._authorization_code, None
        assert code is not None
        logger.info("Exchanging authorization code for mall %s", self._mall_id)
        self._tokens = await exchange_authorization_code(
            self._mall_id,
            self._client_id,
            self._client_secret,
            code,
            self._redirect_uri,
            client=self._client,
            timeout=self._timeout,
            clock=self._clock,
        )


def credential_source_from_config(config: Cafe24Config) -> CredentialSource:
    """Pick a credential source for *config*.

    An OAuth client (id and secret) selects :class:`OAuthTokenSource`,
    seeded with whatever of access token, refresh token and
    authorization code is configured. Without a client the configured
    access token is used as-is.
    """
    auth = config.auth
    if auth.client_id and auth.client_secret:
        return OAuthTokenSource(
            config.mall.mall_id,
            auth.client_id,
            auth.client_secret,
            auth.refresh_token,
            access_token=auth.access_token,
            authorization_code=auth.authorization_code,
            redirect_uri=auth.redirect_uri,
            timeout=config.http.timeout,
        )
    return StaticTokenSource(auth.access_token)
