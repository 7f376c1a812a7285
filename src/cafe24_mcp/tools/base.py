"""Operation declaration and tool result types.

An :class:`OperationSpec` is created once at bootstrap and never
mutated. A :class:`ToolResult` is what crosses the boundary back to the
hosting runtime.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cafe24_mcp.schema.nodes import ObjectNode
    from cafe24_mcp.tools.presenter import Presenter

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})


class Route(enum.Enum):
    """Where a validated field ends up in the outbound request."""

    PATH = "path"
    HEADER = "header"
    QUERY = "query"
    BODY = "body"


@dataclass(frozen=True, slots=True)
class SideEffectProfile:
    """Hints for the hosting runtime. Not enforced here."""

    read_only: bool = False
    destructive: bool = False
    idempotent: bool = False
    open_world: bool = True


READ_ONLY = SideEffectProfile(read_only=True, idempotent=True)
CREATE = SideEffectProfile()
UPDATE = SideEffectProfile(idempotent=True)
DELETE = SideEffectProfile(destructive=True, idempotent=True)


@dataclass(frozen=True, slots=True)
class OperationSpec:
    """A named operation: schema, route and presentation rules.

    ``wire_names`` renames fields on the way out (``name`` is sent as
    ``member_name``). ``body_envelope`` nests every body-routed field
    under one key, so callers pass flat arguments for endpoints that
    expect ``{"request": {...}}``.
    """

    name: str
    title: str
    description: str
    method: str
    path: str
    parameters: ObjectNode
    side_effects: SideEffectProfile = field(default_factory=SideEffectProfile)
    routing: dict[str, Route] = field(default_factory=dict)
    wire_names: dict[str, str] = field(default_factory=dict)
    body_envelope: str | None = None
    presenter: Presenter | None = None

    def __post_init__(self) -> None:
        if self.method not in HTTP_METHODS:
            msg = f"Unsupported HTTP method for {self.name}: {self.method}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """Listing metadata for an operation, suitable for MCP registration."""

    name: str
    title: str
    description: str
    parameters_schema: dict[str, Any]
    side_effects: SideEffectProfile


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Uniform result of one invocation."""

    summary_text: str
    structured: Any = None
    is_error: bool = False
