"""Declared admin API operations.

Each resource module exposes an ``OPERATIONS`` tuple.
:func:`build_registry` registers them all once and freezes the result.
"""

from __future__ import annotations

from cafe24_mcp.catalog import (
    app,
    brand,
    category,
    customer,
    kakao,
    order,
    order_memo,
    product,
    shop,
    webhook,
)
from cafe24_mcp.tools.registry import OperationRegistry

ALL_OPERATIONS = (
    *shop.OPERATIONS,
    *app.OPERATIONS,
    *product.OPERATIONS,
    *category.OPERATIONS,
    *brand.OPERATIONS,
    *customer.OPERATIONS,
    *order.OPERATIONS,
    *order_memo.OPERATIONS,
    *kakao.OPERATIONS,
    *webhook.OPERATIONS,
)


def build_registry() -> OperationRegistry:
    """Return a frozen registry holding every catalogued operation."""
    registry = OperationRegistry()
    registry.register_all(ALL_OPERATIONS)
    return registry.freeze()


__all__ = ["ALL_OPERATIONS", "build_registry"]
