"""Reference strategy: evaluate filters against in-memory Python objects.

Values are read through accessors supplied at registration time. An
accessor is either a callable taking the object, or a name: mapping
targets are read by key, anything else by attribute.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from filterbuilder.domain.entries import RuleValue
from filterbuilder.domain.types import GroupType, Operation
from filterbuilder.strategies.base import Strategy

type Accessor = Callable[[Any], Any] | str


@dataclass(frozen=True)
class ObjectBoundFilter:
    """Predicate over a single object."""

    adheres_fn: Callable[[Any], bool] = field(repr=False)
    description: str = ""

    def adheres(self, obj: Any) -> bool:
        return bool(self.adheres_fn(obj))


def _resolve_accessor(accessor: Accessor) -> Callable[[Any], Any]:
    if callable(accessor):
        return accessor
    name = accessor

    def read(obj: Any) -> Any:
        if isinstance(obj, Mapping):
            return obj.get(name)
        return getattr(obj, name, None)

    return read


def _kind(value: Any) -> type | None:
    # bool before int: True is an int in Python but a distinct kind here.
    for kind in (bool, int, float, str):
        if isinstance(value, kind):
            return kind
    return None


def strict_equals(left: Any, right: Any) -> bool:
    """Equality that never crosses scalar kinds (``1 != 1.0 != "1" != True``)."""
    return _kind(left) is _kind(right) and bool(left == right)


def _ordered(compare: Callable[[Any, Any], bool], left: Any, right: Any) -> bool:
    try:
        return bool(compare(left, right))
    except TypeError:
        return False


def children_adhere(children: Iterable[ObjectBoundFilter], obj: Any, *, any_: bool) -> bool:
    """AND (``any_=False``) or OR (``any_=True``) over *children*, short-circuiting.

    An empty AND is true, an empty OR is false.
    """
    for child in children:
        if bool(child.adheres(obj)) is any_:
            return any_
    return not any_


class ObjectStrategy(Strategy):
    """Builds :class:`ObjectBoundFilter` predicates.

    Usage::

        strategy = ObjectStrategy()
        config = Configuration(strategy)
        config.register_rule(
            "age",
            ConstraintType.NUMBER,
            [Operation.EQUALS, Operation.GREATER_THAN],
            strategy.make_rule("age"),
        )
    """

    def make_group_bound_filter(
        self,
        group_type: GroupType,
        children: Sequence[ObjectBoundFilter],
    ) -> ObjectBoundFilter:
        members = tuple(children)
        any_ = group_type is GroupType.OR
        return ObjectBoundFilter(
            lambda obj: children_adhere(members, obj, any_=any_),
            description=f"group:{group_type.value}",
        )

    def make_rule(
        self, accessor: Accessor
    ) -> Callable[[Operation, RuleValue], ObjectBoundFilter]:
        """Return a rule bind function reading the compared value via *accessor*."""
        read = _resolve_accessor(accessor)

        def bind(operation: Operation, value: RuleValue) -> ObjectBoundFilter:
            def adheres(obj: Any) -> bool:
                actual = read(obj)
                match operation:
                    case Operation.EQUALS:
                        return strict_equals(actual, value)
                    case Operation.ONE_OF:
                        return any(strict_equals(actual, item) for item in value)  # type: ignore[union-attr]
                    case Operation.STARTS_WITH:
                        return isinstance(actual, str) and actual.startswith(str(value))
                    case Operation.LESS_THAN:
                        return _ordered(lambda a, b: a < b, actual, value)
                    case Operation.GREATER_THAN:
                        return _ordered(lambda a, b: a > b, actual, value)
                return False

            return ObjectBoundFilter(adheres, description=f"rule:{operation.value}")

        return bind

    def make_relation(
        self, accessor: Accessor
    ) -> Callable[[GroupType, Sequence[ObjectBoundFilter]], ObjectBoundFilter]:
        """Return a relation bind function reading the related collection via *accessor*.

        The bound filter holds when at least one related object satisfies the
        children under the relation's own combinator.
        """
        read = _resolve_accessor(accessor)

        def bind(
            group_type: GroupType, children: Sequence[ObjectBoundFilter]
        ) -> ObjectBoundFilter:
            members = tuple(children)
            any_ = group_type is GroupType.OR

            def adheres(obj: Any) -> bool:
                related = read(obj) or ()
                return any(children_adhere(members, item, any_=any_) for item in related)

            return ObjectBoundFilter(adheres, description=f"relation:{group_type.value}")

        return bind
