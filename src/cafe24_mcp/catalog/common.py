"""Schema fragments shared by many admin API operations."""

from __future__ import annotations

from typing import Any

from cafe24_mcp.schema.nodes import NO_DEFAULT, EnumNode, NumberNode

SHOP_NO = NumberNode(
    integer=True,
    minimum=1,
    required=False,
    default=1,
    description="Shop Number",
)


def limit(maximum: int = 100, default: int = 10) -> NumberNode:
    return NumberNode(
        integer=True,
        minimum=1,
        maximum=maximum,
        required=False,
        default=default,
        description=f"Maximum results to return (1-{maximum})",
    )


def offset(maximum: int | None = 8000) -> NumberNode:
    return NumberNode(
        integer=True,
        minimum=0,
        maximum=maximum,
        required=False,
        default=0,
        description="Start location of list",
    )


def flag(
    description: str,
    *,
    required: bool = False,
    default: Any = NO_DEFAULT,
    nullable: bool = False,
) -> EnumNode:
    """A ``"T"``/``"F"`` switch, the admin API's boolean."""
    return EnumNode(
        values=("T", "F"),
        required=required,
        default=default,
        nullable=nullable,
        description=description,
    )
