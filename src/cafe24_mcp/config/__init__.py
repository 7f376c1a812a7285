"""Configuration loading and validation."""

from cafe24_mcp.config.loader import load_config
from cafe24_mcp.config.schema import (
    AuthConfig,
    Cafe24Config,
    HttpConfig,
    LoggingConfig,
    MallConfig,
    RetrySettings,
)

__all__ = [
    "AuthConfig",
    "Cafe24Config",
    "HttpConfig",
    "LoggingConfig",
    "MallConfig",
    "RetrySettings",
    "load_config",
]
