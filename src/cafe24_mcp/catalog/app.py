"""App information operations."""

from __future__ import annotations

from cafe24_mcp.schema.nodes import EnumNode, ObjectNode, StringNode
from cafe24_mcp.tools.base import READ_ONLY, UPDATE, OperationSpec
from cafe24_mcp.tools.presenter import Field, Presenter

_APP_FIELDS = (
    Field("Version", "version"),
    Field("Version Expiration Date", "version_expiration_date"),
    Field("Initial Version", "initial_version"),
    Field("Previous Version", "previous_version"),
    Field("Extension Type", "extension_type"),
)

GET_APP = OperationSpec(
    name="cafe24_get_app",
    title="Get Cafe24 App Information",
    description=(
        "Retrieve app version information: current, initial and previous "
        "version, version expiration date and extension type."
    ),
    method="GET",
    path="/admin/apps",
    parameters=ObjectNode(fields={}),
    side_effects=READ_ONLY,
    presenter=Presenter(title="App Information", unwrap="app", fields=_APP_FIELDS),
)

UPDATE_APP = OperationSpec(
    name="cafe24_update_app",
    title="Update Cafe24 App Information",
    description="Update the app version and extension type.",
    method="PUT",
    path="/admin/apps",
    parameters=ObjectNode(
        fields={
            "request": ObjectNode(
                fields={
                    "version": StringNode(description="Version"),
                    "extension_type": EnumNode(
                        values=("section", "embedded"),
                        description="Extension type (section or embedded)",
                    ),
                },
                description="Update request",
            ),
        }
    ),
    side_effects=UPDATE,
    presenter=Presenter(title="App Updated", unwrap="app", fields=_APP_FIELDS),
)

OPERATIONS = (GET_APP, UPDATE_APP)
