"""Multi-shop operations.

Shop numbers returned here are what every other operation takes as
``shop_no``.
"""

from __future__ import annotations

from typing import Any

from cafe24_mcp.schema.nodes import NumberNode, ObjectNode
from cafe24_mcp.tools.base import READ_ONLY, OperationSpec
from cafe24_mcp.tools.presenter import Field, Presenter


def _active(value: Any) -> str:
    return "Active" if value == "T" else "Inactive"


def _shop_type(value: Any) -> str:
    return "Default Shop" if value == "T" else "Multi-shop"


def _domains(value: Any) -> str:
    if not isinstance(value, list) or not value:
        return "None"
    return ", ".join(str(domain) for domain in value)


LIST_SHOPS = OperationSpec(
    name="cafe24_list_shops",
    title="List Cafe24 Shops",
    description=(
        "Retrieve all multi-shops of the account with shop number, name, "
        "domain, language, currency and active status."
    ),
    method="GET",
    path="/admin/shops",
    parameters=ObjectNode(fields={}),
    side_effects=READ_ONLY,
    presenter=Presenter(
        title="Shop List",
        unwrap="shops",
        collection=True,
        noun="shops",
        item_line=(
            "[{shop_no}] {shop_name} domain: {primary_domain}, active: {active}, "
            "language: {language_code}, currency: {currency_code}"
        ),
    ),
)

GET_SHOP = OperationSpec(
    name="cafe24_get_shop",
    title="Get Cafe24 Shop Detail",
    description=(
        "Retrieve one shop by shop number: domains, localization (language, "
        "currency, timezone), design skins and activity status."
    ),
    method="GET",
    path="/admin/shops/{shop_no}",
    parameters=ObjectNode(
        fields={"shop_no": NumberNode(integer=True, minimum=1, description="Multi-shop number")}
    ),
    side_effects=READ_ONLY,
    presenter=Presenter(
        title="Shop Detail [{shop_no}]",
        unwrap="shop",
        fields=(
            Field("Name", "shop_name"),
            Field("Type", "default", _shop_type),
            Field("Status", "active", _active),
            Field("Primary Domain", "primary_domain"),
            Field("Base Domain", "base_domain"),
            Field("Connected Domains", "slave_domain", _domains),
            Field("Country", "business_country_code"),
            Field("Language", "language_name"),
            Field("Currency", "currency_code"),
            Field("Timezone", "timezone"),
            Field("PC Skin", "pc_skin_no"),
            Field("Mobile Skin", "mobile_skin_no"),
            Field("HTTPS", "is_https_active", _active),
        ),
    ),
)

OPERATIONS = (LIST_SHOPS, GET_SHOP)
