"""FilterBuilder — turns an untyped payload into a bound filter tree.

The three entry points are mutually recursive and share one ErrorSink:

- :meth:`FilterBuilder.make_group` validates a ``{"type": "group"}`` node.
- :meth:`FilterBuilder.make_children` walks a list of child nodes.
- :meth:`FilterBuilder.make_for_entry` validates a rule or relation node.

INVARIANT: validation never stops at the first problem. Every node records
its own issues and siblings are still visited, so one pass reports every
discoverable error. A node that fails its own checks yields None and is left
out of its parent's children; the parent is still bound.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from filterbuilder.domain.entries import RelationEntry, RuleEntry, SchemaEntry
from filterbuilder.domain.errors import CUSTOM_ERROR_CODE, ErrorCode, ErrorFieldCode
from filterbuilder.domain.types import ConstraintType, GroupType, Operation
from filterbuilder.exceptions import MissingConfigurationEntry
from filterbuilder.services.sink import ErrorSink

if TYPE_CHECKING:
    from filterbuilder.domain.entries import FieldReporter
    from filterbuilder.schema import Configuration

logger = logging.getLogger(__name__)

GROUP_TYPE = "group"


def _is_scalar(value: Any) -> bool:
    return isinstance(value, str | int | float) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _is_list(value: Any) -> bool:
    return isinstance(value, list | tuple)


def _is_value_list(value: Any) -> bool:
    return _is_list(value) and all(_is_scalar(item) for item in value)


# Value check for every operation except one_of.
_SCALAR_CHECKS: dict[ConstraintType, Callable[[Any], bool]] = {
    ConstraintType.STRING: lambda value: isinstance(value, str),
    ConstraintType.NUMBER: _is_number,
    ConstraintType.DROPDOWN: _is_scalar,
}


class FilterBuilder:
    """Stateless builder bound to one Configuration.

    Relations hand their children to the related Configuration's own
    builder, so nested nodes are resolved against the nested schema and
    localized with the nested translation.
    """

    def __init__(self, configuration: Configuration) -> None:
        self._configuration = configuration

    # --- error helpers ---

    def _fail(self, sink: ErrorSink, error: ErrorCode) -> None:
        sink.add(error, self._configuration.translation.translate_error(error))

    def _fail_field(self, sink: ErrorSink, error: ErrorFieldCode, field: str) -> None:
        message = self._configuration.translation.translate_error_with_field(error, field)
        sink.add(error, message, field=field)

    def _field_reporter(self, sink: ErrorSink, field: str) -> FieldReporter:
        def fail(error: ErrorFieldCode | str) -> None:
            if isinstance(error, ErrorFieldCode):
                self._fail_field(sink, error, field)
            else:
                sink.add(CUSTOM_ERROR_CODE, str(error), field=field)

        return fail

    def _too_deep(self, sink: ErrorSink, depth: int) -> bool:
        max_depth = self._configuration.config.max_depth
        if depth <= max_depth:
            return False
        logger.warning(
            "Filter payload exceeds max depth %d",
            max_depth,
            extra={"max_depth": max_depth, "depth": depth},
        )
        self._fail(sink, ErrorCode.MAX_DEPTH_EXCEEDED)
        return True

    # --- traversal ---

    def make_children(self, payload: Any, sink: ErrorSink, *, depth: int = 1) -> list[Any]:
        """Bind every usable child node in *payload*, preserving order.

        Elements that are not mappings, and mappings that are neither a
        group nor a named entry, are skipped without an error.
        """
        children: list[Any] = []
        for child in payload:
            if not isinstance(child, Mapping):
                continue

            bound: Any = None
            if child.get("type") == GROUP_TYPE:
                bound = self.make_group(child, sink, depth=depth)
            elif isinstance(child.get("name"), str):
                name = child["name"]
                try:
                    entry = self._configuration.lookup(name)
                except MissingConfigurationEntry as exc:
                    sink.add(ErrorFieldCode.MISSING_CONFIGURATION_ENTRY, exc.message, field=name)
                else:
                    bound = self.make_for_entry(entry, child, sink, depth=depth)

            if bound is not None:
                children.append(bound)

        return children

    def make_group(self, payload: Any, sink: ErrorSink, *, depth: int = 1) -> Any | None:
        """Validate and bind a group node; None if the node itself is invalid."""
        if not (
            isinstance(payload, Mapping)
            and payload.get("type") == GROUP_TYPE
            and isinstance(payload.get("operation"), str)
            and _is_list(payload.get("children"))
        ):
            self._fail(sink, ErrorCode.INVALID_GROUP)
            return None

        try:
            group_type = GroupType(payload["operation"])
        except ValueError:
            self._fail(sink, ErrorCode.INVALID_GROUP)
            return None

        if self._too_deep(sink, depth):
            return None

        children = self.make_children(payload["children"], sink, depth=depth + 1)
        return self._configuration.strategy.make_group_bound_filter(group_type, children)

    def make_for_entry(
        self,
        entry: SchemaEntry,
        payload: Mapping[str, Any],
        sink: ErrorSink,
        *,
        depth: int = 1,
    ) -> Any | None:
        """Validate *payload* against *entry* and bind it."""
        if isinstance(entry, RuleEntry):
            return self._make_rule(entry, payload, sink)
        if isinstance(entry, RelationEntry):
            return self._make_relation(entry, payload, sink, depth=depth)
        return None

    def _make_rule(
        self, entry: RuleEntry, payload: Mapping[str, Any], sink: ErrorSink
    ) -> Any | None:
        field = entry.name
        if not (isinstance(payload.get("operation"), str) and "value" in payload):
            self._fail_field(sink, ErrorFieldCode.INVALID_RULE, field)
            return None

        try:
            operation = Operation(payload["operation"])
        except ValueError:
            self._fail_field(sink, ErrorFieldCode.INVALID_OPERATION, field)
            return None

        value = payload["value"]

        # The three checks below report independently; an unsupported
        # operation is reported but the rule is still bound.
        if not entry.is_operation_supported(operation):
            self._fail_field(sink, ErrorFieldCode.UNSUPPORTED_OPERATION, field)

        entry.perform_extra_validation(value, self._field_reporter(sink, field))

        if value is None:
            self._fail_field(sink, ErrorFieldCode.EMPTY_VALUE, field)

        if operation is Operation.ONE_OF:
            if not _is_value_list(value):
                self._fail_field(sink, ErrorFieldCode.INVALID_VALUE, field)
                return None
            if entry.constraint_type is ConstraintType.DROPDOWN and len(value) == 0:
                self._fail_field(sink, ErrorFieldCode.EMPTY_ARRAY, field)
                return None
            return entry.bind(operation, list(value))

        if not _SCALAR_CHECKS[entry.constraint_type](value):
            self._fail_field(sink, ErrorFieldCode.INVALID_VALUE, field)
            return None
        return entry.bind(operation, value)

    def _make_relation(
        self,
        entry: RelationEntry,
        payload: Mapping[str, Any],
        sink: ErrorSink,
        *,
        depth: int,
    ) -> Any | None:
        field = entry.name
        if not (isinstance(payload.get("operation"), str) and _is_list(payload.get("children"))):
            self._fail_field(sink, ErrorFieldCode.INVALID_RULE, field)
            return None

        try:
            group_type = GroupType(payload["operation"])
        except ValueError:
            self._fail_field(sink, ErrorFieldCode.INVALID_OPERATION, field)
            return None

        if len(payload["children"]) == 0:
            self._fail_field(sink, ErrorFieldCode.EMPTY_RELATION, field)
            return None

        if self._too_deep(sink, depth):
            return None

        related = entry.configuration.builder
        children = related.make_children(payload["children"], sink, depth=depth + 1)
        return entry.bind(group_type, children)
