"""Schema entries: the named rules and relations a Configuration accepts.

Entries are immutable. A RuleEntry checks at construction time that every
supported operation is permitted by its constraint type; a misdeclared
schema is a programming error and fails immediately.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from filterbuilder.domain.errors import ErrorFieldCode
from filterbuilder.domain.types import ConstraintType, GroupType, Operation
from filterbuilder.exceptions import SchemaDeclarationError

if TYPE_CHECKING:
    from filterbuilder.schema import Configuration

type Scalar = str | int | float
type RuleValue = Scalar | list[Scalar]

# fail(ErrorFieldCode) is localized against the entry name; fail(str) is kept verbatim.
type FieldReporter = Callable[[ErrorFieldCode | str], None]

type RuleBindFn = Callable[[Operation, RuleValue], Any]
type RelationBindFn = Callable[[GroupType, list[Any]], Any]
type ExtraValidation = Callable[[Any, FieldReporter], None]


def _require_name(name: str) -> None:
    if not isinstance(name, str) or not name:
        msg = f"Schema entry name must be a non-empty string, got {name!r}"
        raise SchemaDeclarationError(msg)


@dataclass(frozen=True)
class RuleEntry:
    """A leaf entry binding a named scalar comparison to a filter.

    Attributes:
        name: Key of the entry in its Configuration.
        constraint_type: Scalar kind of the rule's value.
        supported_operations: Subset of ``constraint_type.operations``.
        bind_fn: Produces a bound filter from ``(operation, value)``.
        extra_validation: Optional ``(value, fail)`` hook run on every rule node.
    """

    name: str
    constraint_type: ConstraintType
    supported_operations: frozenset[Operation]
    bind_fn: RuleBindFn = field(repr=False)
    extra_validation: ExtraValidation | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        _require_name(self.name)
        object.__setattr__(self, "constraint_type", ConstraintType(self.constraint_type))
        # Accept any iterable of operations; store a frozenset.
        try:
            operations = frozenset(Operation(op) for op in self.supported_operations)
        except ValueError as exc:
            msg = f"Unknown operation declared for rule '{self.name}': {exc}"
            raise SchemaDeclarationError(msg) from exc
        object.__setattr__(self, "supported_operations", operations)

        not_permitted = operations - self.constraint_type.operations
        if not_permitted:
            msg = (
                f"Operation(s) {sorted(op.value for op in not_permitted)} not permitted for "
                f"{self.constraint_type.value} rule '{self.name}'"
            )
            raise SchemaDeclarationError(msg)

    def is_operation_supported(self, operation: Operation) -> bool:
        return operation in self.supported_operations

    def perform_extra_validation(self, value: Any, fail: FieldReporter) -> None:
        if self.extra_validation is not None:
            self.extra_validation(value, fail)

    def bind(self, operation: Operation, value: RuleValue) -> Any:
        return self.bind_fn(operation, value)


@dataclass(frozen=True)
class RelationEntry:
    """An entry mapping a named related collection to a nested schema.

    Attributes:
        name: Key of the entry in its Configuration.
        bind_fn: Produces a bound filter from ``(group_type, children)``.
        configuration: Schema governing the related entity's own payload.
    """

    name: str
    bind_fn: RelationBindFn = field(repr=False)
    configuration: Configuration = field(repr=False)

    def __post_init__(self) -> None:
        _require_name(self.name)

    def bind(self, group_type: GroupType, children: list[Any]) -> Any:
        return self.bind_fn(group_type, children)


type SchemaEntry = RuleEntry | RelationEntry
