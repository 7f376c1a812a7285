"""Response presentation.

Turns an :data:`~cafe24_mcp.http.base.ApiResult` into a
:class:`~cafe24_mcp.tools.base.ToolResult` with a markdown summary and
a structured payload.

Unwrapping is deterministic: if the presenter names an ``unwrap`` key
and the body is an object containing that key, the key's value is the
payload; otherwise the whole body is. Missing or null values render as
``N/A`` so every summary has the same lines regardless of how complete
the response was.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from cafe24_mcp.core.errors import ErrorKind
from cafe24_mcp.http.base import Failure
from cafe24_mcp.tools.base import ToolResult

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from cafe24_mcp.http.base import ApiResult
    from cafe24_mcp.tools.base import OperationSpec

PLACEHOLDER = "N/A"

_MISSING = object()


def yes_no(value: Any) -> str:
    """Render the API's ``"T"``/``"F"`` flags."""
    if value in ("T", True):
        return "Yes"
    if value in ("F", False):
        return "No"
    return str(value)


def use_or_not(value: Any) -> str:
    if value in ("T", True):
        return "Use"
    if value in ("F", False):
        return "Do not use"
    return str(value)


@dataclass(frozen=True, slots=True)
class Field:
    """One summary line: ``- **label**: value``.

    ``key`` may be dotted to reach nested values.
    """

    label: str
    key: str
    fmt: Callable[[Any], str] | None = None


@dataclass(frozen=True, slots=True)
class Presenter:
    """Presentation rules declared alongside an operation.

    Attributes:
        title: Heading template, formatted with the validated params.
            Falls back to the operation title.
        unwrap: Top-level key holding the payload, if any.
        fields: Lines rendered from an object payload.
        collection: Payload is a list; render a count and one line per item.
        noun: Plural noun for the count line of collections.
        total: Top-level body key holding the overall match count, for
            paginated collections.
        item_line: Template formatted with each collection item.
        structured: ``"raw"`` returns the decoded body unchanged;
            ``"payload"`` returns the unwrapped payload.
    """

    title: str = ""
    unwrap: str | None = None
    fields: tuple[Field, ...] = ()
    collection: bool = False
    noun: str = "items"
    total: str | None = None
    item_line: str = ""
    structured: str = "raw"

    def payload(self, body: Any) -> Any:
        if self.unwrap and isinstance(body, dict) and self.unwrap in body:
            return body[self.unwrap]
        return body


class _Placeholders(dict):  # type: ignore[type-arg]
    """``str.format_map`` mapping that renders missing keys as N/A."""

    def __missing__(self, key: str) -> str:
        return PLACEHOLDER


def _fill(template: str, values: Mapping[str, Any] | None) -> str:
    source = values if isinstance(values, dict) else {}
    mapping = _Placeholders(
        {k: PLACEHOLDER if v is None else v for k, v in source.items()}
    )
    return template.format_map(mapping)


def _lookup(payload: Any, key: str) -> Any:
    current = payload
    for part in key.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _render_field(field: Field, payload: Any) -> str:
    value = _lookup(payload, field.key)
    if value is _MISSING or value is None or value == "":
        shown = PLACEHOLDER
    elif field.fmt is not None:
        shown = field.fmt(value)
    else:
        shown = str(value)
    return f"- **{field.label}**: {shown}"


def _structured(presenter: Presenter, body: Any, payload: Any) -> Any:
    if body is None:
        return None
    if presenter.structured == "raw":
        return body
    if isinstance(payload, list):
        return {"items": payload}
    if isinstance(payload, dict):
        return payload
    return {"value": payload}


def _count_line(presenter: Presenter, body: Any, shown: int) -> str:
    if presenter.total is None:
        return f"Found {shown} {presenter.noun}."
    total = body.get(presenter.total) if isinstance(body, dict) else None
    if total is None:
        total = shown
    return f"Found {total} {presenter.noun} (showing {shown})"


def _success_summary(
    spec: OperationSpec,
    presenter: Presenter,
    body: Any,
    params: Mapping[str, Any] | None,
) -> str:
    payload = presenter.payload(body)
    title = _fill(presenter.title or spec.title, params)
    lines = [f"## {title}"]

    if presenter.collection:
        items = payload if isinstance(payload, list) else []
        lines.append("")
        lines.append(_count_line(presenter, body, len(items)))
        for item in items:
            text = _fill(presenter.item_line, item) if presenter.item_line else str(item)
            lines.append(f"- {text}")
    elif presenter.fields:
        lines.append("")
        lines.extend(_render_field(f, payload) for f in presenter.fields)

    return "\n".join(lines)


_API_HINTS = {
    400: "Check the request parameters.",
    401: "The access token is invalid or expired.",
    403: "The app does not have the scope required for this resource.",
    404: "The requested resource was not found.",
    422: "The server rejected the request data.",
    429: "Rate limit exceeded. Wait briefly before retrying.",
}


def failure_summary(failure: Failure) -> str:
    """Human-readable explanation for a classified failure."""
    kind = failure.kind
    if kind is ErrorKind.VALIDATION_ERROR:
        return f"Error: Invalid parameters - {failure.message}"
    if kind is ErrorKind.AUTH_ERROR:
        return (
            f"Error: Authentication failed - {failure.message}. "
            "Check the Cafe24 access token or OAuth client settings."
        )
    if kind is ErrorKind.API_ERROR:
        status = failure.http_status
        text = f"Error: Cafe24 API request failed (HTTP {status}): {failure.message}"
        hint = _API_HINTS.get(status or 0)
        if hint is None and status is not None and status >= 500:
            hint = "The Cafe24 service is unavailable. Try again later."
        return f"{text}. {hint}" if hint else text
    if kind is ErrorKind.TRANSPORT_ERROR:
        return f"Error: Could not reach the Cafe24 API - {failure.message}. The request can be retried."
    if kind is ErrorKind.INTERNAL_ERROR:
        return f"Error: Internal error while handling the request ({failure.message})"
    return f"Error: {failure.message}"


def present(
    spec: OperationSpec,
    result: ApiResult,
    params: Mapping[str, Any] | None = None,
) -> ToolResult:
    """Convert *result* into the uniform tool result."""
    if isinstance(result, Failure):
        return ToolResult(summary_text=failure_summary(result), structured=None, is_error=True)

    presenter = spec.presenter or Presenter()
    payload = presenter.payload(result.data)
    return ToolResult(
        summary_text=_success_summary(spec, presenter, result.data, params),
        structured=_structured(presenter, result.data, payload),
        is_error=False,
    )
