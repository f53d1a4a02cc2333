"""filterbuilder — validate untyped filter payloads and bind them to a strategy."""

from filterbuilder.domain.types import ConstraintType, GroupType, Operation
from filterbuilder.exceptions import (
    FilterBuilderError,
    InvalidConfiguration,
    MissingConfigurationEntry,
    SchemaDeclarationError,
    ValidationFailure,
)
from filterbuilder.schema import Configuration
from filterbuilder.strategies import ObjectStrategy

__all__ = [
    "Configuration",
    "ConstraintType",
    "FilterBuilderError",
    "GroupType",
    "InvalidConfiguration",
    "MissingConfigurationEntry",
    "ObjectStrategy",
    "Operation",
    "SchemaDeclarationError",
    "ValidationFailure",
]
