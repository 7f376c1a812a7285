"""Render schema nodes as JSON Schema for MCP tool listings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

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
    from cafe24_mcp.schema.nodes import SchemaNode


def _base(node: SchemaNode) -> dict[str, Any]:
    if isinstance(node, ObjectNode):
        return {"type": "object"}
    if isinstance(node, ArrayNode):
        return {"type": "array"}
    if isinstance(node, StringNode):
        return {"type": "string"}
    if isinstance(node, NumberNode):
        return {"type": "integer" if node.integer else "number"}
    if isinstance(node, BooleanNode):
        return {"type": "boolean"}
    if isinstance(node, EnumNode):
        return {"enum": list(node.values)}
    if isinstance(node, LiteralNode):
        return {"const": node.value}
    return {}


def to_json_schema(node: SchemaNode) -> dict[str, Any]:
    """Convert *node* (recursively) into a JSON Schema dict."""
    schema = _base(node)

    if isinstance(node, ObjectNode):
        schema["properties"] = {
            name: to_json_schema(child) for name, child in node.fields.items()
        }
        required = [
            name
            for name, child in node.fields.items()
            if child.required and not child.has_default
        ]
        if required:
            schema["required"] = required
        if node.strict:
            schema["additionalProperties"] = False
    elif isinstance(node, ArrayNode):
        schema["items"] = to_json_schema(node.items)
        if node.min_items is not None:
            schema["minItems"] = node.min_items
        if node.max_items is not None:
            schema["maxItems"] = node.max_items
    elif isinstance(node, StringNode):
        if node.length is not None:
            schema["minLength"] = node.length
            schema["maxLength"] = node.length
        if node.min_length is not None:
            schema["minLength"] = node.min_length
        if node.max_length is not None:
            schema["maxLength"] = node.max_length
        if node.pattern is not None:
            schema["pattern"] = node.pattern
    elif isinstance(node, NumberNode):
        if node.minimum is not None:
            schema["minimum"] = node.minimum
        if node.maximum is not None:
            schema["maximum"] = node.maximum

    if node.nullable:
        if "type" in schema:
            schema["type"] = [schema["type"], "null"]
        elif "enum" in schema:
            schema["enum"] = [*schema["enum"], None]
    if node.has_default:
        schema["default"] = node.default
    if node.description:
        schema["description"] = node.description
    return schema
