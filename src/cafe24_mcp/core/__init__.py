"""Core errors and shared utilities."""

from cafe24_mcp.core.errors import (
    ApiError,
    AuthError,
    BuilderError,
    Cafe24Error,
    ConfigError,
    DuplicateOperationError,
    ErrorKind,
    RegistryError,
    RegistryFrozenError,
    TransportError,
    UnknownOperationError,
    ValidationError,
)
from cafe24_mcp.core.retry import RetryConfig, is_retryable, retry_with_backoff

__all__ = [
    "ApiError",
    "AuthError",
    "BuilderError",
    "Cafe24Error",
    "ConfigError",
    "DuplicateOperationError",
    "ErrorKind",
    "RegistryError",
    "RegistryFrozenError",
    "RetryConfig",
    "TransportError",
    "UnknownOperationError",
    "ValidationError",
    "is_retryable",
    "retry_with_backoff",
]
