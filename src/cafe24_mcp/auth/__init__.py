"""Credential sources for the admin API."""

from cafe24_mcp.auth.credentials import (
    CredentialSource,
    OAuthTokenSource,
    StaticTokenSource,
    TokenData,
    credential_source_from_config,
    exchange_authorization_code,
)

__all__ = [
    "CredentialSource",
    "OAuthTokenSource",
    "StaticTokenSource",
    "TokenData",
    "credential_source_from_config",
    "exchange_authorization_code",
]
