"""Operation registry: the process-wide directory of operations.

Populated once during bootstrap, then frozen. After :meth:`freeze`
the registry is read-only and safe to share between concurrent
invocations without locking.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from cafe24_mcp.core.errors import (
    DuplicateOperationError,
    RegistryFrozenError,
    UnknownOperationError,
)
from cafe24_mcp.schema.json_schema import to_json_schema
from cafe24_mcp.tools.base import ToolDefinition

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from cafe24_mcp.tools.base import OperationSpec


class OperationRegistry:
    """Registry of :class:`OperationSpec` entries keyed by name."""

    def __init__(self) -> None:
        self._operations: dict[str, OperationSpec] = {}
        self._frozen: Mapping[str, OperationSpec] | None = None

    @property
    def frozen(self) -> bool:
        return self._frozen is not None

    def register(self, spec: OperationSpec) -> None:
        """Register an operation.

        Raises:
            DuplicateOperationError: If the name is already registered.
            RegistryFrozenError: If the registry has been frozen.
        """
        if self._frozen is not None:
            msg = f"Registry is frozen; cannot register {spec.name}"
            raise RegistryFrozenError(msg)
        if spec.name in self._operations:
            raise DuplicateOperationError(spec.name)
        self._operations[spec.name] = spec

    def register_all(self, specs: Iterable[OperationSpec]) -> None:
        for spec in specs:
            self.register(spec)

    def freeze(self) -> OperationRegistry:
        """Forbid further registration. Returns self for chaining."""
        if self._frozen is None:
            self._frozen = MappingProxyType(self._operations)
        return self

    def get(self, name: str) -> OperationSpec:
        """Get an operation by name.

        Raises:
            UnknownOperationError: If the operation is not registered.
        """
        try:
            return self._operations[name]
        except KeyError:
            raise UnknownOperationError(name) from None

    def list_definitions(self) -> list[ToolDefinition]:
        """Return listing metadata for every registered operation."""
        return [
            ToolDefinition(
                name=op.name,
                title=op.title,
                description=op.description,
                parameters_schema=to_json_schema(op.parameters),
                side_effects=op.side_effects,
            )
            for op in self._operations.values()
        ]

    def list_names(self) -> list[str]:
        """Return names of all registered operations."""
        return list(self._operations.keys())

    def __len__(self) -> int:
        return len(self._operations)

    def __contains__(self, name: object) -> bool:
        return name in self._operations
