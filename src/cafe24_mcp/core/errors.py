"""Exception hierarchy for cafe24-mcp.

Every module imports from here. The hierarchy is:

    Cafe24Error
    ├── ValidationError(field, reason)
    ├── RegistryError
    │   ├── DuplicateOperationError(name)
    │   ├── UnknownOperationError(name)
    │   └── RegistryFrozenError
    ├── BuilderError
    ├── AuthError
    ├── ApiError(http_status, raw, retry_after)
    ├── TransportError
    └── ConfigError

Each class carries the :class:`ErrorKind` it is reported as when it
crosses the dispatcher boundary.
"""

from __future__ import annotations

import enum
from typing import Any


class ErrorKind(enum.Enum):
    """Failure classification surfaced to callers."""

    VALIDATION_ERROR = "ValidationError"
    DUPLICATE_OPERATION = "DuplicateOperationError"
    UNKNOWN_OPERATION = "UnknownOperationError"
    AUTH_ERROR = "AuthError"
    API_ERROR = "ApiError"
    TRANSPORT_ERROR = "TransportError"
    INTERNAL_ERROR = "InternalError"


class Cafe24Error(Exception):
    """Base exception for all cafe24-mcp errors."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR


# ─── Validation ───────────────────────────────────────────────


class ValidationError(Cafe24Error):
    """Caller input does not satisfy the operation's parameter schema."""

    kind = ErrorKind.VALIDATION_ERROR

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        where = field or "<root>"
        super().__init__(f"{where}: {reason}")


# ─── Registry ─────────────────────────────────────────────────


class RegistryError(Cafe24Error):
    """Base for operation registration and lookup errors."""


class DuplicateOperationError(RegistryError):
    """An operation with the same name is already registered."""

    kind = ErrorKind.DUPLICATE_OPERATION

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Operation already registered: {name}")


class UnknownOperationError(RegistryError):
    """No operation is registered under the requested name."""

    kind = ErrorKind.UNKNOWN_OPERATION

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown operation: {name}")


class RegistryFrozenError(RegistryError):
    """Registration attempted after bootstrap froze the registry."""


# ─── Request building ─────────────────────────────────────────


class BuilderError(Cafe24Error):
    """Operation declaration and validated parameters do not line up.

    A defect in the catalog rather than in caller input, so it is
    reported as an internal error.
    """


# ─── Remote calls ─────────────────────────────────────────────


class AuthError(Cafe24Error):
    """Credential could not be obtained or refreshed."""

    kind = ErrorKind.AUTH_ERROR


class ApiError(Cafe24Error):
    """Remote service answered with a 4xx/5xx status."""

    kind = ErrorKind.API_ERROR

    def __init__(
        self,
        http_status: int,
        message: str,
        raw: Any = None,
        retry_after: float | None = None,
    ) -> None:
        self.http_status = http_status
        self.message = message
        self.raw = raw
        self.retry_after = retry_after
        super().__init__(f"HTTP {http_status}: {message}")


class TransportError(Cafe24Error):
    """Network-level failure: timeout, refused connection, DNS."""

    kind = ErrorKind.TRANSPORT_ERROR


# ─── Configuration ────────────────────────────────────────────


class ConfigError(Cafe24Error):
    """Invalid configuration."""
