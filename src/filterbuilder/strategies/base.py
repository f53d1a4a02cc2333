"""Strategy ABC and the BoundFilter capability.

A Strategy decides what a bound filter *is*: an in-memory predicate, a
query fragment, anything the host application evaluates. Rule and relation
bind functions are supplied per entry at registration time, usually built
through helpers the concrete strategy exposes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from filterbuilder.domain.types import GroupType


@runtime_checkable
class BoundFilter(Protocol):
    """Anything that can be asked whether an object satisfies it."""

    def adheres(self, obj: Any) -> bool: ...


class Strategy(ABC):
    """Pluggable evaluation policy for a Configuration."""

    @abstractmethod
    def make_group_bound_filter(self, group_type: GroupType, children: Sequence[Any]) -> Any:
        """Combine already-bound *children* under *group_type*."""
        ...
