"""Webhook settings."""

from __future__ import annotations

from typing import Any

from cafe24_mcp.catalog.common import flag
from cafe24_mcp.schema.nodes import ObjectNode
from cafe24_mcp.tools.base import READ_ONLY, UPDATE, OperationSpec
from cafe24_mcp.tools.presenter import Field, Presenter


def _reception(value: Any) -> str:
    return "Activated" if value == "T" else "Deactivated"


def _scopes(value: Any) -> str:
    if not isinstance(value, list) or not value:
        return "None"
    return ", ".join(str(scope) for scope in value)


GET_WEBHOOK_SETTING = OperationSpec(
    name="cafe24_get_webhook_setting",
    title="Get Cafe24 Webhook Setting",
    description="Retrieve webhook scopes and reception status.",
    method="GET",
    path="/admin/webhooks/setting",
    parameters=ObjectNode(fields={}),
    side_effects=READ_ONLY,
    presenter=Presenter(
        title="Webhook Setting",
        unwrap="webhook",
        fields=(
            Field("Reception Status", "reception_status", _reception),
            Field("Scopes", "scopes", _scopes),
        ),
        structured="payload",
    ),
)

UPDATE_WEBHOOK_SETTING = OperationSpec(
    name="cafe24_update_webhook_setting",
    title="Update Cafe24 Webhook Setting",
    description="Activate or deactivate webhook reception.",
    method="PUT",
    path="/admin/webhooks/setting",
    parameters=ObjectNode(
        fields={
            "reception_status": flag(
                "Webhook reception status (T: Activated, F: Deactivated)",
                required=True,
            ),
        }
    ),
    side_effects=UPDATE,
    body_envelope="request",
    presenter=Presenter(
        title="Webhook Setting Updated",
        unwrap="webhook",
        fields=(Field("Reception Status", "reception_status", _reception),),
        structured="payload",
    ),
)

OPERATIONS = (GET_WEBHOOK_SETTING, UPDATE_WEBHOOK_SETTING)
