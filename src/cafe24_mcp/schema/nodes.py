"""Schema node types.

A parameter schema is a tree of immutable nodes interpreted by the
generic validator in :mod:`cafe24_mcp.schema.validator`. Every node
carries the same presence constraints (``required``, ``default``,
``nullable``); the concrete subclasses add kind-specific constraints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


class _NoDefault:
    """Sentinel type for fields without a declared default."""

    _instance: ClassVar[_NoDefault | None] = None

    def __new__(cls) -> _NoDefault:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


NO_DEFAULT: Any = _NoDefault()


@dataclass(frozen=True, slots=True, kw_only=True)
class SchemaNode:
    """Presence constraints shared by every node kind."""

    kind: ClassVar[str] = "any"

    required: bool = True
    default: Any = NO_DEFAULT
    nullable: bool = False
    description: str = ""

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


@dataclass(frozen=True, slots=True, kw_only=True)
class StringNode(SchemaNode):
    kind: ClassVar[str] = "string"

    min_length: int | None = None
    max_length: int | None = None
    length: int | None = None
    pattern: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NumberNode(SchemaNode):
    """Numeric field. ``integer=True`` rejects fractional values."""

    kind: ClassVar[str] = "number"

    integer: bool = False
    minimum: float | None = None
    maximum: float | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class BooleanNode(SchemaNode):
    kind: ClassVar[str] = "boolean"


@dataclass(frozen=True, slots=True, kw_only=True)
class EnumNode(SchemaNode):
    kind: ClassVar[str] = "enum"

    values: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class LiteralNode(SchemaNode):
    kind: ClassVar[str] = "literal"

    value: Any = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ArrayNode(SchemaNode):
    kind: ClassVar[str] = "array"

    items: SchemaNode = field(default_factory=SchemaNode)
    min_items: int | None = None
    max_items: int | None = None


@dataclass(frozen=True, slots=True)
class CrossFieldRule:
    """Predicate over a validated object, checked after its fields pass.

    ``field`` names the member the failure is reported against; empty
    means the object itself.
    """

    predicate: Callable[[Mapping[str, Any]], bool]
    message: str
    field: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class ObjectNode(SchemaNode):
    """Object with declared members.

    Strict objects reject undeclared members. Non-strict objects pass
    them through untouched.
    """

    kind: ClassVar[str] = "object"

    fields: Mapping[str, SchemaNode] = field(default_factory=dict)
    strict: bool = True
    rules: tuple[CrossFieldRule, ...] = ()


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


def at_least_one_of(*names: str) -> CrossFieldRule:
    """Rule: at least one of *names* is present and non-empty."""
    if len(names) == 2:
        message = f"Either {names[0]} or {names[1]} must be provided"
    else:
        message = f"At least one of {', '.join(names)} must be provided"
    return CrossFieldRule(
        predicate=lambda data: any(_is_set(data.get(n)) for n in names),
        message=message,
        field=names[0],
    )


def required_if(name: str, equals: Any, then: str) -> CrossFieldRule:
    """Rule: *then* must be present whenever *name* equals *equals*."""
    return CrossFieldRule(
        predicate=lambda data: data.get(name) != equals or _is_set(data.get(then)),
        message=f"{then} is required when {name} is {equals!r}",
        field=then,
    )
