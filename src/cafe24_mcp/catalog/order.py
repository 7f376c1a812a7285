"""Order read operations."""

from __future__ import annotations

from cafe24_mcp.catalog.common import SHOP_NO, limit, offset
from cafe24_mcp.schema.nodes import ObjectNode, StringNode
from cafe24_mcp.tools.base import READ_ONLY, OperationSpec
from cafe24_mcp.tools.presenter import Field, Presenter

_DATE = r"^\d{4}-\d{2}-\d{2}$"

LIST_ORDERS = OperationSpec(
    name="cafe24_list_orders",
    title="List Cafe24 Orders",
    description=(
        "Retrieve orders with ID, name, status codes, payment status, amount, "
        "customer and order date. Filter by order ID, date range and order "
        "status code. Paginated results."
    ),
    method="GET",
    path="/admin/orders",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "limit": limit(default=20),
            "offset": offset(maximum=None),
            "order_id": StringNode(
                required=False, description="Filter by specific order ID(s), comma-separated"
            ),
            "start_date": StringNode(
                pattern=_DATE,
                required=False,
                description="Filter orders from this date (YYYY-MM-DD)",
            ),
            "end_date": StringNode(
                pattern=_DATE,
                required=False,
                description="Filter orders until this date (YYYY-MM-DD)",
            ),
            "order_status_code": StringNode(
                required=False, description="Filter by order status code"
            ),
        }
    ),
    side_effects=READ_ONLY,
    presenter=Presenter(
        unwrap="orders",
        collection=True,
        noun="orders",
        total="total",
        item_line=(
            "Order #{order_id} {order_name} status: {order_status_name} "
            "({order_status_code}), amount: {settle_amount}, "
            "customer: {customer_name} ({customer_id}), date: {order_date}"
        ),
    ),
)

GET_ORDER = OperationSpec(
    name="cafe24_get_order",
    title="Get Cafe24 Order Details",
    description=(
        "Retrieve one order by order ID: status, payment info, amount, "
        "customer and order date."
    ),
    method="GET",
    path="/admin/orders/{order_id}",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "order_id": StringNode(min_length=1, description="Order ID"),
        }
    ),
    side_effects=READ_ONLY,
    presenter=Presenter(
        title="Order Details",
        unwrap="order",
        fields=(
            Field("Order ID", "order_id"),
            Field("Order Name", "order_name"),
            Field("Status", "order_status_name"),
            Field("Payment Status", "payment_status_name"),
            Field("Amount", "settle_amount"),
            Field("Currency", "currency"),
            Field("Customer", "customer_name"),
            Field("Customer ID", "customer_id"),
            Field("Order Date", "order_date"),
        ),
    ),
)

OPERATIONS = (LIST_ORDERS, GET_ORDER)
