"""Kakao integrations: AlimTalk notifications and KakaoSync login."""

from __future__ import annotations

from typing import Any

from cafe24_mcp.catalog.common import SHOP_NO, flag
from cafe24_mcp.schema.nodes import ObjectNode, StringNode
from cafe24_mcp.tools.base import READ_ONLY, UPDATE, OperationSpec
from cafe24_mcp.tools.presenter import Field, Presenter, yes_no

# ── AlimTalk ─────────────────────────────────────────────────────

_ALIMTALK_FIELDS = (Field("KakaoAlimtalk Enabled", "use_kakaoalimtalk", yes_no),)

GET_KAKAOALIMTALK_SETTING = OperationSpec(
    name="cafe24_get_kakaoalimtalk_setting",
    title="Get Cafe24 KakaoAlimtalk Settings",
    description="Retrieve KakaoAlimtalk (Kakao Notification Talk) settings for the shop.",
    method="GET",
    path="/admin/kakaoalimtalk/setting",
    parameters=ObjectNode(fields={"shop_no": SHOP_NO}),
    side_effects=READ_ONLY,
    presenter=Presenter(
        title="KakaoAlimtalk Settings (Shop #{shop_no})",
        unwrap="kakaoalimtalk",
        fields=_ALIMTALK_FIELDS,
        structured="payload",
    ),
)

UPDATE_KAKAOALIMTALK_SETTING = OperationSpec(
    name="cafe24_update_kakaoalimtalk_setting",
    title="Update Cafe24 KakaoAlimtalk Settings",
    description=(
        "Enable or disable KakaoAlimtalk (Kakao Notification Talk) for the shop. "
        "Set use_kakaoalimtalk to T (enable) or F (disable)."
    ),
    method="PUT",
    path="/admin/kakaoalimtalk/setting",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "use_kakaoalimtalk": flag("Enable KakaoAlimtalk: T=Yes, F=No", required=True),
        }
    ),
    side_effects=UPDATE,
    body_envelope="request",
    presenter=Presenter(
        title="KakaoAlimtalk Settings Updated (Shop #{shop_no})",
        unwrap="kakaoalimtalk",
        fields=_ALIMTALK_FIELDS,
        structured="payload",
    ),
)

# ── KakaoSync ────────────────────────────────────────────────────


def _signup_page(value: Any) -> str:
    return "Redirect" if value == "T" else "Immediate"


GET_KAKAOSYNC_SETTING = OperationSpec(
    name="cafe24_get_kakaosync_setting",
    title="Get Cafe24 KakaoSync Settings",
    description=(
        "Retrieve KakaoSync settings including REST API key, JavaScript key, "
        "auto-login status, and third-party agreement details."
    ),
    method="GET",
    path="/admin/socials/kakaosync",
    parameters=ObjectNode(fields={"shop_no": SHOP_NO}),
    side_effects=READ_ONLY,
    presenter=Presenter(
        title="KakaoSync Settings (Shop #{shop_no})",
        unwrap="kakaosync",
        fields=(
            Field("Enabled", "use_kakaosync", yes_no),
            Field("REST API Key", "rest_api_key"),
            Field("JavaScript Key", "javascript_key"),
            Field("Auto Login", "auto_login", yes_no),
            Field("Third Party Agree", "thirdparty_agree", yes_no),
            Field("Third Party Agree Date", "thirdparty_agree_date"),
            Field("Signup Result Page", "use_signup_result_page", _signup_page),
        ),
        structured="payload",
    ),
)

UPDATE_KAKAOSYNC_SETTING = OperationSpec(
    name="cafe24_update_kakaosync_setting",
    title="Update Cafe24 KakaoSync Settings",
    description=(
        "Update KakaoSync settings. Requires REST API key and JavaScript key. "
        "Can also configure auto-login and signup result page behaviors."
    ),
    method="PUT",
    path="/admin/socials/kakaosync",
    parameters=ObjectNode(
        fields={
            "shop_no": SHOP_NO,
            "rest_api_key": StringNode(description="REST API Key"),
            "javascript_key": StringNode(description="JavaScript Key"),
            "auto_login": flag("Auto Login: T=Yes, F=No (Default: F)", default="F"),
            "use_signup_result_page": flag(
                "Use Signup Result Page: T=Yes, F=No (Default: F)", default="F"
            ),
        }
    ),
    side_effects=UPDATE,
    body_envelope="request",
    presenter=Presenter(
        title="KakaoSync settings updated (Shop #{shop_no})",
        unwrap="kakaosync",
        fields=(
            Field("Auto Login", "auto_login", yes_no),
            Field("Signup Result Page", "use_signup_result_page", _signup_page),
        ),
        structured="payload",
    ),
)

OPERATIONS = (
    GET_KAKAOALIMTALK_SETTING,
    UPDATE_KAKAOALIMTALK_SETTING,
    GET_KAKAOSYNC_SETTING,
    UPDATE_KAKAOSYNC_SETTING,
)
