"""Map validated params onto an outbound HTTP call.

Routing order for each validated field:

    1. ``{name}`` tokens in the path template consume their field.
    2. Tenant-scope fields (``shop_no``) always become headers.
    3. The operation's routing table, if it names the field.
    4. Query string for GET/DELETE, JSON body for POST/PUT.

Fields keep their names on the wire unless ``wire_names`` says
otherwise. With a ``body_envelope`` the body becomes
``{envelope: {...fields}}``. Absent fields never reach the query or body.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from cafe24_mcp.core.errors import BuilderError
from cafe24_mcp.http.base import CallDescriptor
from cafe24_mcp.tools.base import Route

if TYPE_CHECKING:
    from collections.abc import Mapping

    from cafe24_mcp.tools.base import OperationSpec

SHOP_HEADER = "X-Cafe24-Shop-No"

HEADER_FIELDS: dict[str, str] = {"shop_no": SHOP_HEADER}

_TOKEN_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")

_QUERY_METHODS = frozenset({"GET", "DELETE"})


def path_tokens(template: str) -> list[str]:
    """Return the ``{param}`` names in *template*, in order."""
    return _TOKEN_RE.findall(template)


def _header_value(value: Any) -> str:
    if isinstance(value, bool):
        return "T" if value else "F"
    return str(value)


def _query_value(value: Any) -> Any:
    # The admin API takes multi-value filters as comma-separated strings
    # and booleans as T/F.
    if isinstance(value, bool):
        return "T" if value else "F"
    if isinstance(value, list):
        return ",".join(str(v) for v in value)
    return value


def _substitute(spec: OperationSpec, validated: Mapping[str, Any]) -> tuple[str, dict[str, Any]]:
    path_params: dict[str, Any] = {}

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in validated or validated[name] is None:
            msg = f"{spec.name}: path parameter '{name}' has no validated value"
            raise BuilderError(msg)
        value = validated[name]
        path_params[name] = value
        return quote(str(value), safe="")

    path = _TOKEN_RE.sub(_replace, spec.path)
    return path, path_params


def build(spec: OperationSpec, validated: Mapping[str, Any]) -> CallDescriptor:
    """Build a :class:`CallDescriptor` for *spec* from validated params.

    Raises:
        BuilderError: A path token has no matching validated field, or
            the routing table sends a field somewhere it cannot go.
    """
    path, path_params = _substitute(spec, validated)

    default_route = Route.QUERY if spec.method in _QUERY_METHODS else Route.BODY
    headers: dict[str, str] = {}
    query: dict[str, Any] = {}
    body: dict[str, Any] = {}

    for name, value in validated.items():
        if name in path_params:
            continue
        if name in HEADER_FIELDS:
            if value is not None:
                headers[HEADER_FIELDS[name]] = _header_value(value)
            continue

        route = spec.routing.get(name, default_route)
        key = spec.wire_names.get(name, name)
        if route is Route.QUERY:
            # A query string has no null; an explicit null is dropped.
            if value is not None:
                query[key] = _query_value(value)
        elif route is Route.BODY:
            body[key] = value
        elif route is Route.HEADER:
            if value is not None:
                headers[key] = _header_value(value)
        else:
            msg = f"{spec.name}: field '{name}' routed to PATH but not in {spec.path}"
            raise BuilderError(msg)

    payload: dict[str, Any] | None = body or None
    if spec.body_envelope and spec.method not in _QUERY_METHODS:
        payload = {spec.body_envelope: body}

    return CallDescriptor(
        method=spec.method,
        path_template=spec.path,
        path=path,
        path_params=path_params,
        query=query,
        body=payload,
        headers=headers,
    )
