"""BuildResult — non-raising outcome of validating a payload."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from filterbuilder.services.sink import ValidationIssue


class BuildResult(BaseModel):
    """Outcome of :meth:`Configuration.validate`.

    Attributes:
        ok: True when a filter was built and no issue was recorded.
        filter: The bound root filter; None whenever ``ok`` is False.
        issues: Every recorded issue, in discovery order.
    """

    model_config = {"frozen": True}

    ok: bool
    filter: Any = None
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def messages(self) -> list[str]:
        return [issue.message for issue in self.issues]
