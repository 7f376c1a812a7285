"""Declarative parameter schemas and the generic validator."""

from cafe24_mcp.schema.json_schema import to_json_schema
from cafe24_mcp.schema.nodes import (
    NO_DEFAULT,
    ArrayNode,
    BooleanNode,
    CrossFieldRule,
    EnumNode,
    LiteralNode,
    NumberNode,
    ObjectNode,
    SchemaNode,
    StringNode,
    at_least_one_of,
    required_if,
)
from cafe24_mcp.schema.validator import validate

__all__ = [
    "NO_DEFAULT",
    "ArrayNode",
    "BooleanNode",
    "CrossFieldRule",
    "EnumNode",
    "LiteralNode",
    "NumberNode",
    "ObjectNode",
    "SchemaNode",
    "StringNode",
    "at_least_one_of",
    "required_if",
    "to_json_schema",
    "validate",
]
