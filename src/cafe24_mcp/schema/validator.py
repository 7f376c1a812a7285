"""Generic schema validator.

``validate`` walks a :class:`SchemaNode` tree depth-first and returns a
fully-defaulted copy of the input. The first violation raises
:class:`~cafe24_mcp.core.errors.ValidationError`; errors are not
accumulated. Defaults fill absent fields only, never explicit nulls.
"""

from __future__ import annotations

import copy
import math
import re
from typing import TYPE_CHECKING, Any

from cafe24_mcp.core.errors import ValidationError
from cafe24_mcp.schema.nodes import (
    ArrayNode,
    BooleanNode,
    EnumNode,
    LiteralNode,
    NumberNode,
    ObjectNode,
    StringNode,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from cafe24_mcp.schema.nodes import SchemaNode


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _same_value(a: Any, b: Any) -> bool:
    # True == 1 in Python; enum membership must not conflate them.
    return type(a) is type(b) and a == b


def _check_object(node: ObjectNode, value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValidationError(path, f"expected object, got {_type_name(value)}")

    if node.strict:
        for key in value:
            if key not in node.fields:
                raise ValidationError(_join(path, key), "unknown field")

    out: dict[str, Any] = {}
    for name, child in node.fields.items():
        field_path = _join(path, name)
        if name not in value:
            if child.has_default:
                out[name] = copy.deepcopy(child.default)
            elif child.required:
                raise ValidationError(field_path, "required field is missing")
            continue
        out[name] = _check(child, value[name], field_path)

    if not node.strict:
        for key, extra in value.items():
            if key not in node.fields:
                out[key] = copy.deepcopy(extra)

    for rule in node.rules:
        if not rule.predicate(out):
            target = _join(path, rule.field) if rule.field else path
            raise ValidationError(target, rule.message)

    return out


def _check_array(node: ArrayNode, value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValidationError(path, f"expected array, got {_type_name(value)}")
    if node.min_items is not None and len(value) < node.min_items:
        raise ValidationError(path, f"must contain at least {node.min_items} item(s)")
    if node.max_items is not None and len(value) > node.max_items:
        raise ValidationError(path, f"must contain at most {node.max_items} item(s)")
    return [_check(node.items, item, f"{path}[{i}]") for i, item in enumerate(value)]


def _check_string(node: StringNode, value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(path, f"expected string, got {_type_name(value)}")
    size = len(value)
    if node.length is not None and size != node.length:
        raise ValidationError(path, f"must be exactly {node.length} characters")
    if node.min_length is not None and size < node.min_length:
        raise ValidationError(path, f"must be at least {node.min_length} characters")
    if node.max_length is not None and size > node.max_length:
        raise ValidationError(path, f"must be at most {node.max_length} characters")
    if node.pattern is not None and re.fullmatch(node.pattern, value) is None:
        raise ValidationError(path, f"does not match pattern {node.pattern}")
    return value


def _check_number(node: NumberNode, value: Any, path: str) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(path, f"expected number, got {_type_name(value)}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(path, "must be a finite number")
    if node.integer:
        if isinstance(value, float):
            if not value.is_integer():
                raise ValidationError(path, "expected integer, got fractional number")
            value = int(value)
    if node.minimum is not None and value < node.minimum:
        raise ValidationError(path, f"must be >= {node.minimum:g}")
    if node.maximum is not None and value > node.maximum:
        raise ValidationError(path, f"must be <= {node.maximum:g}")
    return value


def _check_boolean(node: BooleanNode, value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(path, f"expected boolean, got {_type_name(value)}")
    return value


def _check_enum(node: EnumNode, value: Any, path: str) -> Any:
    if not any(_same_value(value, allowed) for allowed in node.values):
        allowed = ", ".join(repr(v) for v in node.values)
        raise ValidationError(path, f"must be one of {allowed}")
    return value


def _check_literal(node: LiteralNode, value: Any, path: str) -> Any:
    if not _same_value(value, node.value):
        raise ValidationError(path, f"must be {node.value!r}")
    return value


_CHECKERS: dict[type, Callable[[Any, Any, str], Any]] = {
    ObjectNode: _check_object,
    ArrayNode: _check_array,
    StringNode: _check_string,
    NumberNode: _check_number,
    BooleanNode: _check_boolean,
    EnumNode: _check_enum,
    LiteralNode: _check_literal,
}


def _check(node: SchemaNode, value: Any, path: str) -> Any:
    if value is None:
        if node.nullable:
            return None
        raise ValidationError(path, "must not be null")
    checker = _CHECKERS.get(type(node))
    if checker is None:
        # Untyped node: accept any non-null JSON value as-is.
        return copy.deepcopy(value)
    return checker(node, value, path)


def validate(node: ObjectNode, raw: Any) -> dict[str, Any]:
    """Validate *raw* against *node* and return the validated params.

    The input is never mutated. Absent optional fields without a
    default stay absent from the result.

    Raises:
        ValidationError: On the first violation found.
    """
    return _check_object(node, raw, "")
