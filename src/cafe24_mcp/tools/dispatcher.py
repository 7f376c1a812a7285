"""Tool dispatcher: the single invocation entry point.

Runs validate → build → execute → present for a named operation.
Every failure, including defects in this package, comes back as a
:class:`~cafe24_mcp.tools.base.ToolResult` with ``is_error=True``;
only host cancellation propagates.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any, Protocol

from cafe24_mcp.core.errors import (
    BuilderError,
    ErrorKind,
    UnknownOperationError,
    ValidationError,
)
from cafe24_mcp.http.base import Failure
from cafe24_mcp.http.builder import build
from cafe24_mcp.schema.validator import validate
from cafe24_mcp.tools.base import ToolResult
from cafe24_mcp.tools.presenter import failure_summary, present

if TYPE_CHECKING:
    from cafe24_mcp.http.base import ApiResult, CallDescriptor
    from cafe24_mcp.tools.registry import OperationRegistry

logger = logging.getLogger(__name__)


class Executor(Protocol):
    """Anything that can run a call descriptor (normally TransportClient)."""

    async def execute(self, descriptor: CallDescriptor) -> ApiResult: ...


def _correlation_id() -> str:
    return uuid.uuid4().hex[:12]


class Dispatcher:
    """Binds the registry to a transport and invokes operations by name."""

    def __init__(self, registry: OperationRegistry, transport: Executor) -> None:
        self._registry = registry
        self._transport = transport

    @property
    def registry(self) -> OperationRegistry:
        return self._registry

    async def invoke(self, name: str, raw_args: Any = None) -> ToolResult:
        """Invoke operation *name* with caller-supplied arguments.

        ``None`` arguments are treated as an empty object.
        """
        try:
            spec = self._registry.get(name)
        except UnknownOperationError as e:
            logger.warning("Unknown operation requested: %s", name)
            failure = Failure(ErrorKind.UNKNOWN_OPERATION, str(e))
            return ToolResult(failure_summary(failure), None, is_error=True)

        args = {} if raw_args is None else raw_args
        try:
            params = validate(spec.parameters, args)
            descriptor = build(spec, params)
            logger.debug("Invoking %s: %s %s", name, descriptor.method, descriptor.path)
            result = await self._transport.execute(descriptor)
            if isinstance(result, Failure):
                logger.info(
                    "%s failed: %s (%s)", name, result.kind.value, result.message
                )
            return present(spec, result, params)
        except ValidationError as e:
            logger.info("%s rejected input: %s", name, e)
            failure = Failure(ErrorKind.VALIDATION_ERROR, str(e))
        except BuilderError:
            ref = _correlation_id()
            logger.exception("Request builder failed for %s (ref %s)", name, ref)
            failure = Failure(ErrorKind.INTERNAL_ERROR, f"ref {ref}")
        except Exception:
            ref = _correlation_id()
            logger.exception("Unhandled error in %s (ref %s)", name, ref)
            failure = Failure(ErrorKind.INTERNAL_ERROR, f"ref {ref}")

        return present(spec, failure)
