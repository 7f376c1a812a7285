"""Pydantic models for cafe24-mcp configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_REDIRECT_URI = "http://localhost:8787/cafe24/oauth/callback"
DEFAULT_SCOPE = "mall.read_application,mall.write_application"


class MallConfig(BaseModel):
    """Which mall to talk to."""

    mall_id: str = ""
    mall_id_env: str = "CAFE24_MALL_ID"
    api_version: str | None = None


class AuthConfig(BaseModel):
    """Credentials and OAuth settings.

    Every field with a matching ``*_env`` field falls back to that
    environment variable when left unset. ``authorization_code`` is a
    one-time code from the authorize redirect; with client credentials
    and no refresh token it is exchanged on first use.
    """

    access_token: str | None = None
    access_token_env: str = "CAFE24_ACCESS_TOKEN"
    client_id: str | None = None
    client_id_env: str = "CAFE24_CLIENT_ID"
    client_secret: str | None = None
    client_secret_env: str = "CAFE24_CLIENT_SECRET"
    refresh_token: str | None = None
    refresh_token_env: str = "CAFE24_REFRESH_TOKEN"
    authorization_code: str | None = None
    authorization_code_env: str = "CAFE24_AUTHORIZATION_CODE"
    redirect_uri: str = DEFAULT_REDIRECT_URI
    scope: str | None = None
    scope_env: str = "CAFE24_OAUTH_SCOPE"
    state: str | None = None
    state_env: str = "CAFE24_OAUTH_STATE"


class RetrySettings(BaseModel):
    """Backoff for transient failures. Disabled by default."""

    max_retries: int = Field(default=0, ge=0, le=10)
    base_delay: float = Field(default=1.0, gt=0)
    max_delay: float = Field(default=30.0, gt=0)


class HttpConfig(BaseModel):
    """Outbound HTTP settings."""

    base_url: str | None = None
    timeout: float = Field(default=30.0, gt=0, le=120)
    debug_curl: bool = False
    retry: RetrySettings = Field(default_factory=RetrySettings)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""


class Cafe24Config(BaseModel):
    """Top-level configuration for cafe24-mcp."""

    mall: MallConfig = Field(default_factory=MallConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
