"""HTTP transport for the Cafe24 admin API.

``TransportClient.execute`` never raises for remote or network
failures; it returns a :class:`~cafe24_mcp.http.base.Failure` instead.
Only host cancellation (``asyncio.CancelledError``) escapes, which
aborts the in-flight request.
"""

from __future__ import annotations

import contextlib
import json
import logging
import shlex
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

import httpx

from cafe24_mcp.core.errors import ApiError, AuthError, ErrorKind, TransportError
from cafe24_mcp.core.retry import RetryConfig, retry_with_backoff
from cafe24_mcp.http.base import Failure, Success

if TYPE_CHECKING:
    from cafe24_mcp.auth.credentials import CredentialSource
    from cafe24_mcp.config.schema import Cafe24Config
    from cafe24_mcp.http.base import ApiResult, CallDescriptor

logger = logging.getLogger(__name__)

API_VERSION_HEADER = "X-Cafe24-Api-Version"

_MASKED_HEADERS = frozenset({"authorization"})


def base_url_for(mall_id: str) -> str:
    """Admin API root for a mall."""
    return f"https://{mall_id}.cafe24api.com/api/v2"


def _decode_body(response: httpx.Response) -> Any:
    """Decode a JSON body; empty or non-JSON bodies decode to None."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _error_message(response: httpx.Response, body: Any) -> str:
    """Prefer the server's own message over the status text."""
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(body.get("message"), str):
            return body["message"]
        if isinstance(error, str):
            return error
    return response.reason_phrase or f"HTTP {response.status_code}"


def _retry_after(response: httpx.Response) -> float | None:
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    with contextlib.suppress(ValueError):
        return float(raw)
    return None


def curl_command(
    method: str,
    url: str,
    headers: dict[str, str],
    params: dict[str, Any] | None,
    body: Any,
) -> str:
    """Render a request as a curl command, with credentials masked."""
    parts = ["curl", "-X", method.upper()]
    for key, value in headers.items():
        shown = "***" if key.lower() in _MASKED_HEADERS else value
        parts.extend(["-H", shlex.quote(f"{key}: {shown}")])
    if body is not None:
        parts.extend(["-d", shlex.quote(json.dumps(body, separators=(",", ":")))])
    if params:
        url = f"{url}?{urlencode(params)}"
    parts.append(shlex.quote(url))
    return " ".join(parts)


class TransportClient:
    """Executes call descriptors against the admin API.

    Usage::

        async with TransportClient(base_url_for("myshop"), creds) as transport:
            result = await transport.execute(descriptor)
    """

    def __init__(
        self,
        base_url: str,
        credentials: CredentialSource,
        *,
        api_version: str | None = None,
        timeout: float = 30.0,
        retry: RetryConfig | None = None,
        debug_curl: bool = False,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._credentials = credentials
        self._api_version = api_version
        self._timeout = timeout
        self._retry = retry or RetryConfig()
        self._debug_curl = debug_curl
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
        )

    @classmethod
    def from_config(
        cls,
        config: Cafe24Config,
        credentials: CredentialSource,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> TransportClient:
        http = config.http
        return cls(
            http.base_url or base_url_for(config.mall.mall_id),
            credentials,
            api_version=config.mall.api_version,
            timeout=http.timeout,
            retry=RetryConfig(
                max_retries=http.retry.max_retries,
                base_delay=http.retry.base_delay,
                max_delay=http.retry.max_delay,
            ),
            debug_curl=http.debug_curl,
            client=client,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> TransportClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def execute(self, descriptor: CallDescriptor) -> ApiResult:
        """Run *descriptor* and classify the outcome."""
        try:
            token = await self._credentials.get_token()
        except AuthError as e:
            return Failure(ErrorKind.AUTH_ERROR, str(e))
        except Exception as e:
            logger.warning("Credential source failed: %s", e)
            return Failure(ErrorKind.AUTH_ERROR, f"Credential source failed: {e}")

        try:
            data = await retry_with_backoff(
                lambda: self._send(descriptor, token),
                self._retry,
                on_retry=self._log_retry,
            )
        except ApiError as e:
            return Failure(ErrorKind.API_ERROR, e.message, e.http_status, e.raw)
        except TransportError as e:
            return Failure(ErrorKind.TRANSPORT_ERROR, str(e))
        return Success(data)

    def _headers(self, descriptor: CallDescriptor, token: str) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._api_version:
            headers[API_VERSION_HEADER] = self._api_version
        headers.update(descriptor.headers)
        return headers

    async def _send(self, descriptor: CallDescriptor, token: str) -> Any:
        url = f"{self._base_url}{descriptor.path}"
        headers = self._headers(descriptor, token)
        params = descriptor.query or None

        if self._debug_curl:
            logger.info(
                "CURL: %s",
                curl_command(descriptor.method, url, headers, params, descriptor.body),
            )
        logger.debug("%s %s", descriptor.method, url)

        try:
            response = await self._client.request(
                descriptor.method,
                url,
                params=params,
                json=descriptor.body,
                headers=headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            msg = f"Request timed out after {self._timeout:g}s: {descriptor.method} {descriptor.path}"
            raise TransportError(msg) from e
        except httpx.HTTPError as e:
            msg = f"Network error ({e.__class__.__name__}): {e}"
            raise TransportError(msg) from e

        logger.debug("%s %s -> %d", descriptor.method, url, response.status_code)
        body = _decode_body(response)

        if response.status_code >= 400:
            raise ApiError(
                response.status_code,
                _error_message(response, body),
                raw=body if body is not None else response.text or None,
                retry_after=_retry_after(response),
            )
        return body

    @staticmethod
    def _log_retry(attempt: int, delay: float, error: Exception) -> None:
        logger.warning("Retry %d in %.1fs after: %s", attempt, delay, error)
