"""Product read operations."""

from __future__ import annotations

from cafe24_mcp.catalog.common import SHOP_NO, limit, offset
from cafe24_mcp.schema.nodes import BooleanNode, NumberNode, ObjectNode, StringNode
from cafe24_mcp.tools.base import READ_ONLY, OperationSpec
from cafe24_mcp.tools.presenter import Field, Presenter, yes_no

_PRODUCT_NO = NumberNode(integer=True, minimum=1, description="Product number")

LIST_PRODUCTS = OperationSpec(
    name="cafe24_list_products",
    title="List Cafe24 Products",
    description=(
        "Retrieve products with number, name, code, price, stock and status. "
        "Filter by product number, code, category, price range, selling "
        "status and display status. Paginated results."
    ),
    method="GET",
    path="/admin/products",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "limit": limit(default=20),
            "offset": offset(maximum=None),
            "product_no": NumberNode(
                integer=True, required=False, description="Filter by product number"
            ),
            "product_code": StringNode(required=False, description="Filter by product code"),
            "category_no": NumberNode(
                integer=True, required=False, description="Filter by category number"
            ),
            "min_price": NumberNode(
                minimum=0, required=False, description="Minimum price filter"
            ),
            "max_price": NumberNode(
                minimum=0, required=False, description="Maximum price filter"
            ),
            "selling": BooleanNode(required=False, description="Filter by selling status"),
            "display": BooleanNode(required=False, description="Filter by display status"),
        }
    ),
    side_effects=READ_ONLY,
    presenter=Presenter(
        unwrap="products",
        collection=True,
        noun="products",
        total="total",
        item_line=(
            "{product_name} ({product_no}) code: {product_code}, price: {price}, "
            "stock: {stock}, selling: {selling}"
        ),
    ),
)

GET_PRODUCT = OperationSpec(
    name="cafe24_get_product",
    title="Get Cafe24 Product Details",
    description=(
        "Retrieve one product by product number: name, code, price, stock, "
        "descriptions, selling and display status, and selling dates."
    ),
    method="GET",
    path="/admin/products/{product_no}",
    parameters=ObjectNode(fields={"shop_no": SHOP_NO, "product_no": _PRODUCT_NO}),
    side_effects=READ_ONLY,
    presenter=Presenter(
        title="Product Details",
        unwrap="product",
        fields=(
            Field("Product No", "product_no"),
            Field("Name", "product_name"),
            Field("Code", "product_code"),
            Field("Price", "price"),
            Field("Stock", "stock"),
            Field("Selling", "selling", yes_no),
            Field("Display", "display", yes_no),
            Field("Selling Starts", "selling_date_start"),
            Field("Selling Ends", "selling_date_end"),
        ),
    ),
)

OPERATIONS = (LIST_PRODUCTS, GET_PRODUCT)
