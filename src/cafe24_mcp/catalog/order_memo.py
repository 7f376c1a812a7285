"""Order memo operations."""

from __future__ import annotations

from cafe24_mcp.catalog.common import SHOP_NO, flag, limit, offset
from cafe24_mcp.schema.nodes import (
    ArrayNode,
    EnumNode,
    NumberNode,
    ObjectNode,
    StringNode,
    required_if,
)
from cafe24_mcp.tools.base import CREATE, DELETE, READ_ONLY, UPDATE, OperationSpec
from cafe24_mcp.tools.presenter import Presenter

_ORDER_ID = StringNode(min_length=1, description="Order ID")
_MEMO_NO = NumberNode(integer=True, minimum=1, description="Memo number")

_PRODUCT = ObjectNode(
    fields={
        "product_no": NumberNode(integer=True, minimum=1, description="Product number"),
        "option_code": StringNode(description="Option code"),
    },
)


def _memo_request(*, create: bool) -> ObjectNode:
    return ObjectNode(
        fields={
            "use_customer_inquiry": flag(
                "Add to customer inquiries (T: Used, F: Not used)", default="F"
            ),
            "topic_type": EnumNode(
                values=("cs_01", "cs_02", "cs_03", "cs_04", "cs_05"),
                required=False,
                nullable=True,
                description=(
                    "Inquiry type (cs_01: shipping, cs_02: product, cs_03: payment, "
                    "cs_04: order cancellation, cs_05: change in product to order)"
                ),
            ),
            "status": EnumNode(
                values=("F", "T"),
                required=False,
                nullable=True,
                description="Response status (F: in progress, T: resolved)",
            ),
            "attach_type": EnumNode(
                values=("O", "P"),
                required=False,
                default="O",
                description="Attached to (O: order number, P: item code)",
            ),
            "content": StringNode(
                max_length=1000, required=create, description="Memo description"
            ),
            "starred_memo": flag("Important memo (T: Important, F: General)", default="F"),
            "fixed": flag("Pinned to top (T: Used, F: Not used)", default="F"),
            "product_list": ArrayNode(
                items=_PRODUCT,
                required=False,
                description="Product list (required if attach_type is P)",
            ),
        },
        rules=(required_if("attach_type", "P", "product_list"),),
    )


LIST_ORDER_MEMOS = OperationSpec(
    name="cafe24_list_order_memos",
    title="List Order Memos",
    description="Retrieve admin memos for one or more orders (comma-separated order IDs).",
    method="GET",
    path="/admin/orders/memos",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "order_id": StringNode(
                min_length=1,
                description="Order ID. You can search multiple items with , (comma)",
            ),
            "limit": limit(maximum=500),
            "offset": offset(),
        }
    ),
    side_effects=READ_ONLY,
    presenter=Presenter(
        title="Order Memos",
        unwrap="memos",
        collection=True,
        noun="memos",
        item_line=(
            "Memo #{memo_no} on order {order_id} by {author_id} "
            "({created_date}): {content}"
        ),
    ),
)

CREATE_ORDER_MEMO = OperationSpec(
    name="cafe24_create_order_memo",
    title="Create Order Memo",
    description="Add an admin memo to an order, optionally attached to specific items.",
    method="POST",
    path="/admin/orders/{order_id}/memos",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "order_id": _ORDER_ID,
            "request": _memo_request(create=True),
        }
    ),
    side_effects=CREATE,
    presenter=Presenter(
        title="Created memo for Order #{order_id}",
        unwrap="memo",
        structured="payload",
    ),
)

UPDATE_ORDER_MEMO = OperationSpec(
    name="cafe24_update_order_memo",
    title="Update Order Memo",
    description="Update an existing admin memo on an order.",
    method="PUT",
    path="/admin/orders/{order_id}/memos/{memo_no}",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "order_id": _ORDER_ID,
            "memo_no": _MEMO_NO,
            "request": _memo_request(create=False),
        }
    ),
    side_effects=UPDATE,
    presenter=Presenter(
        title="Updated memo #{memo_no} for Order #{order_id}",
        unwrap="memo",
        structured="payload",
    ),
)

DELETE_ORDER_MEMO = OperationSpec(
    name="cafe24_delete_order_memo",
    title="Delete Order Memo",
    description="Delete an admin memo from an order.",
    method="DELETE",
    path="/admin/orders/{order_id}/memos/{memo_no}",
    parameters=ObjectNode(
        fields={"shop_no": SHOP_NO, "order_id": _ORDER_ID, "memo_no": _MEMO_NO}
    ),
    side_effects=DELETE,
    presenter=Presenter(title="Deleted memo #{memo_no} from Order #{order_id}"),
)

OPERATIONS = (LIST_ORDER_MEMOS, CREATE_ORDER_MEMO, UPDATE_ORDER_MEMO, DELETE_ORDER_MEMO)
