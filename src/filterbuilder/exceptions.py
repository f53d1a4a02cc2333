"""Exception hierarchy for filterbuilder.

Two tiers: schema declaration and lookup failures are raised immediately;
payload validation problems are accumulated and surface together as a
single :class:`ValidationFailure`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from filterbuilder.services.sink import ValidationIssue


class FilterBuilderError(Exception):
    """Base class for every error raised by filterbuilder."""


class SchemaDeclarationError(FilterBuilderError, ValueError):
    """A schema entry was declared with an impossible shape."""


class MissingConfigurationEntry(FilterBuilderError, KeyError):
    """A payload referenced a name the Configuration does not contain."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(message)
        self.name = name
        self.message = message

    def __str__(self) -> str:
        # KeyError would repr() the message.
        return self.message


class UnknownLocale(FilterBuilderError, LookupError):
    """No translation is registered for the requested locale."""


class InvalidSettingsFile(FilterBuilderError):
    """The settings TOML file could not be parsed."""


class ValidationFailure(FilterBuilderError):
    """A payload failed validation.

    Attributes:
        issues: Every recorded issue, in discovery order.
        messages: The localized message of each issue.
    """

    def __init__(self, issues: Sequence[ValidationIssue]) -> None:
        self.issues: tuple[ValidationIssue, ...] = tuple(issues)
        self.messages: list[str] = [issue.message for issue in self.issues]
        super().__init__(". ".join(self.messages) + ".")


class InvalidConfiguration(ValidationFailure):
    """No errors were recorded, yet no filter was produced."""
