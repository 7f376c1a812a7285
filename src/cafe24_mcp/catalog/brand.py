"""Brand operations."""

from __future__ import annotations

from cafe24_mcp.catalog.common import SHOP_NO, flag, limit, offset
from cafe24_mcp.schema.nodes import ObjectNode, StringNode
from cafe24_mcp.tools.base import CREATE, DELETE, READ_ONLY, UPDATE, OperationSpec
from cafe24_mcp.tools.presenter import Field, Presenter, yes_no

_FILTERS = {
    "shop_no": SHOP_NO,
    "brand_code": StringNode(required=False, description="Brand code (comma separated)"),
    "brand_name": StringNode(required=False, description="Brand name (comma separated)"),
    "use_brand": flag("Whether to use a brand"),
}

_BRAND_CODE = StringNode(length=8, description="Brand code")

_BRAND_FIELDS = (
    Field("Brand Code", "brand_code"),
    Field("Brand Name", "brand_name"),
    Field("Used", "use_brand", yes_no),
    Field("Search Keyword", "search_keyword"),
    Field("Products", "product_count"),
    Field("Created", "created_date"),
)

LIST_BRANDS = OperationSpec(
    name="cafe24_list_brands",
    title="List Brands",
    description="Retrieve a list of brands, filtered by code, name or usage.",
    method="GET",
    path="/admin/brands",
    parameters=ObjectNode(fields={**_FILTERS, "offset": offset(), "limit": limit()}),
    side_effects=READ_ONLY,
    presenter=Presenter(
        unwrap="brands",
        collection=True,
        noun="brands",
        item_line="[{brand_code}] {brand_name} (used: {use_brand}, products: {product_count})",
    ),
)

COUNT_BRANDS = OperationSpec(
    name="cafe24_count_brands",
    title="Count Brands",
    description="Count brands matching the given filters.",
    method="GET",
    path="/admin/brands/count",
    parameters=ObjectNode(fields=dict(_FILTERS)),
    side_effects=READ_ONLY,
    presenter=Presenter(fields=(Field("Total", "count"),)),
)

CREATE_BRAND = OperationSpec(
    name="cafe24_create_brand",
    title="Create Brand",
    description="Create a new brand.",
    method="POST",
    path="/admin/brands",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "request": ObjectNode(
                fields={
                    "brand_name": StringNode(max_length=50, description="Brand name"),
                    "use_brand": flag("Whether to use a brand", default="T"),
                    "search_keyword": StringNode(
                        max_length=200, required=False, description="Search keyword"
                    ),
                }
            ),
        }
    ),
    side_effects=CREATE,
    presenter=Presenter(title="Brand Created", unwrap="brand", fields=_BRAND_FIELDS),
)

UPDATE_BRAND = OperationSpec(
    name="cafe24_update_brand",
    title="Update Brand",
    description="Update a brand's name, usage or search keyword.",
    method="PUT",
    path="/admin/brands/{brand_code}",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "brand_code": _BRAND_CODE,
            "request": ObjectNode(
                fields={
                    "brand_name": StringNode(
                        max_length=50, required=False, description="Brand name"
                    ),
                    "use_brand": flag("Whether to use a brand"),
                    "search_keyword": StringNode(
                        max_length=200, required=False, description="Search keyword"
                    ),
                }
            ),
        }
    ),
    side_effects=UPDATE,
    presenter=Presenter(
        title="Brand {brand_code} Updated", unwrap="brand", fields=_BRAND_FIELDS
    ),
)

DELETE_BRAND = OperationSpec(
    name="cafe24_delete_brand",
    title="Delete Brand",
    description="Delete a brand by its code.",
    method="DELETE",
    path="/admin/brands/{brand_code}",
    parameters=ObjectNode(fields={"shop_no": SHOP_NO, "brand_code": _BRAND_CODE}),
    side_effects=DELETE,
    presenter=Presenter(title="Brand {brand_code} Deleted"),
)

OPERATIONS = (LIST_BRANDS, COUNT_BRANDS, CREATE_BRAND, UPDATE_BRAND, DELETE_BRAND)
