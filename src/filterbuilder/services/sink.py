"""ValidationIssue and ErrorSink — the accumulator threaded through a build.

INVARIANT: recording an issue never raises and never aborts traversal.
Issues keep discovery order and are never deduplicated.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel


class ValidationIssue(BaseModel):
    """One localized validation problem found in a payload."""

    model_config = {"frozen": True}

    code: str
    message: str
    field: str | None = None


class ErrorSink:
    """Append-only list of :class:`ValidationIssue` for a single build pass."""

    def __init__(self) -> None:
        self._issues: list[ValidationIssue] = []

    def add(self, code: str, message: str, field: str | None = None) -> None:
        self._issues.append(ValidationIssue(code=str(code), message=message, field=field))

    @property
    def issues(self) -> tuple[ValidationIssue, ...]:
        return tuple(self._issues)

    @property
    def messages(self) -> list[str]:
        return [issue.message for issue in self._issues]

    def __len__(self) -> int:
        return len(self._issues)

    def __iter__(self) -> Iterator[ValidationIssue]:
        return iter(self._issues)
