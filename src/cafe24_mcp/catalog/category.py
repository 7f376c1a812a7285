"""Category operations: listing, category products and SEO settings."""

from __future__ import annotations

from cafe24_mcp.catalog.common import SHOP_NO, flag, limit, offset
from cafe24_mcp.schema.nodes import NumberNode, ObjectNode, StringNode
from cafe24_mcp.tools.base import READ_ONLY, UPDATE, OperationSpec
from cafe24_mcp.tools.presenter import Field, Presenter, use_or_not

_CATEGORY_NO = NumberNode(integer=True, minimum=1, description="Category number")

_DISPLAY_GROUP = NumberNode(
    integer=True,
    minimum=1,
    maximum=3,
    description="Display group (1: Normal, 2: Recommendation, 3: New)",
)

LIST_CATEGORIES = OperationSpec(
    name="cafe24_list_categories",
    title="List Cafe24 Product Categories",
    description=(
        "Retrieve product categories with number, name, depth and parent "
        "category. Supports pagination and filtering by parent category."
    ),
    method="GET",
    path="/admin/categories",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "limit": limit(default=20),
            "offset": offset(maximum=None),
            "parent_category_no": NumberNode(
                integer=True, required=False, description="Filter by parent category"
            ),
        }
    ),
    side_effects=READ_ONLY,
    presenter=Presenter(
        unwrap="categories",
        collection=True,
        noun="categories",
        total="total",
        item_line=(
            "{category_name} ({category_no}) depth: {category_depth}, "
            "parent: {parent_category_no}"
        ),
    ),
)

LIST_CATEGORY_PRODUCTS = OperationSpec(
    name="cafe24_list_category_products",
    title="List Products in Category",
    description="List the products displayed in a category for one display group.",
    method="GET",
    path="/admin/categories/{category_no}/products",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "category_no": _CATEGORY_NO,
            "display_group": _DISPLAY_GROUP,
            "limit": limit(maximum=50000, default=50000),
        }
    ),
    side_effects=READ_ONLY,
    presenter=Presenter(
        title="Products in Category #{category_no}",
        unwrap="products",
        collection=True,
        noun="products",
        item_line="Product {product_no} (sequence: {sequence_no}, sold out: {sold_out})",
    ),
)

COUNT_CATEGORY_PRODUCTS = OperationSpec(
    name="cafe24_count_category_products",
    title="Count Products in Category",
    description="Count the products displayed in a category for one display group.",
    method="GET",
    path="/admin/categories/{category_no}/products/count",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "category_no": _CATEGORY_NO,
            "display_group": _DISPLAY_GROUP,
        }
    ),
    side_effects=READ_ONLY,
    presenter=Presenter(
        title="Product count in Category #{category_no}",
        fields=(Field("Total", "count"),),
    ),
)

# ── SEO ──────────────────────────────────────────────────────────

_SEO_FIELDS = (
    Field("Search Engine Exposure", "search_engine_exposure", use_or_not),
    Field("Browser Title", "meta_title"),
    Field("Meta Author", "meta_author"),
    Field("Meta Description", "meta_description"),
    Field("Meta Keywords", "meta_keywords"),
)

RETRIEVE_CATEGORY_SEO = OperationSpec(
    name="cafe24_retrieve_category_seo",
    title="Retrieve Category SEO Settings",
    description=(
        "Retrieve SEO settings for a category including browser title, meta "
        "author, description, keywords, and search engine exposure status."
    ),
    method="GET",
    path="/admin/categories/{category_no}/seo",
    parameters=ObjectNode(fields={"shop_no": SHOP_NO, "category_no": _CATEGORY_NO}),
    side_effects=READ_ONLY,
    presenter=Presenter(
        title="Category SEO Settings for #{category_no} (Shop #{shop_no})",
        unwrap="seo",
        fields=_SEO_FIELDS,
    ),
)

UPDATE_CATEGORY_SEO = OperationSpec(
    name="cafe24_update_category_seo",
    title="Update Category SEO Settings",
    description=(
        "Update SEO settings for a category. Configure browser title, meta "
        "author, description, keywords, and search engine exposure status."
    ),
    method="PUT",
    path="/admin/categories/{category_no}/seo",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "category_no": _CATEGORY_NO,
            "search_engine_exposure": flag(
                "Exposure setting for search engine (T: Use, F: Do not use)"
            ),
            "meta_title": StringNode(required=False, description="Browser title"),
            "meta_author": StringNode(required=False, description="Meta tag 1: Author"),
            "meta_description": StringNode(
                required=False, description="Meta tag 2: Description"
            ),
            "meta_keywords": StringNode(required=False, description="Meta tag 3: Keywords"),
        }
    ),
    side_effects=UPDATE,
    body_envelope="request",
    presenter=Presenter(
        title="SEO settings updated for Category #{category_no} (Shop #{shop_no})",
        unwrap="seo",
        fields=_SEO_FIELDS,
    ),
)

OPERATIONS = (
    LIST_CATEGORIES,
    LIST_CATEGORY_PRODUCTS,
    COUNT_CATEGORY_PRODUCTS,
    RETRIEVE_CATEGORY_SEO,
    UPDATE_CATEGORY_SEO,
)
