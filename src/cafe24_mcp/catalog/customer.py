"""Customer operations."""

from __future__ import annotations

from cafe24_mcp.catalog.common import SHOP_NO, limit, offset
from cafe24_mcp.schema.nodes import ObjectNode, StringNode
from cafe24_mcp.tools.base import READ_ONLY, OperationSpec
from cafe24_mcp.tools.presenter import Field, Presenter

LIST_CUSTOMERS = OperationSpec(
    name="cafe24_list_customers",
    title="List Cafe24 Customers",
    description=(
        "Search customers by member ID, email or name. Returns member ID, "
        "name, email, phone, join date and group. Paginated results."
    ),
    method="GET",
    path="/admin/customers",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "limit": limit(default=20),
            "offset": offset(maximum=None),
            "member_id": StringNode(required=False, description="Filter by member ID"),
            "email": StringNode(required=False, description="Filter by email"),
            "name": StringNode(required=False, description="Filter by name"),
        }
    ),
    side_effects=READ_ONLY,
    wire_names={"name": "member_name"},
    presenter=Presenter(
        unwrap="customers",
        collection=True,
        noun="customers",
        total="total",
        item_line=(
            "{member_name} ({member_id}) email: {email}, phone: {phone}, "
            "joined: {join_date}, group: {group}"
        ),
    ),
)

GET_CUSTOMER = OperationSpec(
    name="cafe24_get_customer",
    title="Get Cafe24 Customer Details",
    description="Retrieve a single customer by member ID.",
    method="GET",
    path="/admin/customers/{member_id}",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "member_id": StringNode(min_length=1, description="Member ID"),
        }
    ),
    side_effects=READ_ONLY,
    presenter=Presenter(
        title="Customer Details",
        unwrap="customer",
        fields=(
            Field("Member ID", "member_id"),
            Field("Name", "member_name"),
            Field("Email", "email"),
            Field("Phone", "phone"),
            Field("Birthdate", "birthdate"),
            Field("Gender", "gender"),
            Field("Join Date", "join_date"),
        ),
    ),
)

OPERATIONS = (LIST_CUSTOMERS, GET_CUSTOMER)
