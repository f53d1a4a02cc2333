"""Operation, group and constraint enums.

The string values are the wire tokens accepted in filter payloads.
"""

from __future__ import annotations

from enum import StrEnum


class Operation(StrEnum):
    """Comparison operations a rule node may request."""

    ONE_OF = "one_of"
    EQUALS = "equals"
    STARTS_WITH = "starts_with"
    LESS_THAN = "less_than"
    GREATER_THAN = "greater_than"


class GroupType(StrEnum):
    """Combinators for groups and relations."""

    AND = "and"
    OR = "or"


class ConstraintType(StrEnum):
    """Scalar kinds a rule may hold."""

    STRING = "string"
    NUMBER = "number"
    DROPDOWN = "dropdown"

    @property
    def operations(self) -> frozenset[Operation]:
        """Operations permitted for this constraint type."""
        return CONSTRAINT_OPERATIONS[self]


CONSTRAINT_OPERATIONS: dict[ConstraintType, frozenset[Operation]] = {
    ConstraintType.STRING: frozenset(
        {Operation.EQUALS, Operation.STARTS_WITH, Operation.ONE_OF},
    ),
    ConstraintType.NUMBER: frozenset(
        {Operation.EQUALS, Operation.LESS_THAN, Operation.GREATER_THAN, Operation.ONE_OF},
    ),
    ConstraintType.DROPDOWN: frozenset(
        {Operation.EQUALS, Operation.ONE_OF},
    ),
}
