"""Call descriptor and API result types.

Data classes are immutable where possible (frozen dataclasses with
slots). A :class:`CallDescriptor` is built fresh per invocation and an
:data:`ApiResult` is what the transport hands back, never an exception.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cafe24_mcp.core.errors import ErrorKind


@dataclass(frozen=True, slots=True)
class CallDescriptor:
    """Everything the transport needs to make one HTTP call."""

    method: str  # "GET", "POST", "PUT", "DELETE"
    path_template: str  # e.g. "/admin/brands/{brand_code}"
    path: str  # template with path params substituted
    path_params: dict[str, Any] = field(default_factory=dict)
    query: dict[str, Any] = field(default_factory=dict)
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Success:
    """Decoded response body. ``data`` is None for empty/non-JSON bodies."""

    data: Any = None


@dataclass(frozen=True, slots=True)
class Failure:
    """Classified failure of a single call."""

    kind: ErrorKind
    message: str
    http_status: int | None = None
    raw: Any = field(default=None, repr=False)


ApiResult = Success | Failure
