"""Tests for FilterBuilder — payload classification, validation and binding.

A recording strategy turns every bound node into a plain tuple so the
built tree can be asserted structurally.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from filterbuilder.config.models import MAX_DEPTH_CEILING, BuilderConfig
from filterbuilder.domain.errors import ErrorFieldCode
from filterbuilder.domain.types import ConstraintType, GroupType, Operation
from filterbuilder.schema import Configuration
from filterbuilder.services.sink import ErrorSink
from filterbuilder.strategies.base import Strategy
from tests.conftest import group, relation, rule


class RecordingStrategy(Strategy):
    def make_group_bound_filter(self, group_type: GroupType, children: Sequence[Any]) -> Any:
        return ("group", group_type.value, list(children))

    def rule(self, name: str) -> Any:
        return lambda operation, value: ("rule", name, operation.value, value)

    def relation(self, name: str) -> Any:
        return lambda group_type, children: ("relation", name, group_type.value, list(children))


def _schema(config: BuilderConfig | None = None, **kwargs: Any) -> Configuration:
    strategy = RecordingStrategy()
    toys = Configuration(strategy, config=config)
    toys.register_rule(
        "toy", ConstraintType.STRING, [Operation.EQUALS], strategy.rule("toy")
    )

    pets = Configuration(strategy, config=config)
    pets.register_rule(
        "species",
        ConstraintType.STRING,
        [Operation.EQUALS, Operation.ONE_OF],
        strategy.rule("species"),
    )
    pets.register_relation("toys", strategy.relation("toys"), toys)

    people = Configuration(strategy, config=config)
    people.register_rule(
        "name",
        ConstraintType.STRING,
        [Operation.EQUALS, Operation.STARTS_WITH, Operation.ONE_OF],
        strategy.rule("name"),
        kwargs.get("name_validation"),
    )
    people.register_rule(
        "status", ConstraintType.STRING, [Operation.EQUALS], strategy.rule("status")
    )
    people.register_rule(
        "age",
        ConstraintType.NUMBER,
        [Operation.EQUALS, Operation.GREATER_THAN, Operation.ONE_OF],
        strategy.rule("age"),
    )
    people.register_rule(
        "role",
        ConstraintType.DROPDOWN,
        [Operation.EQUALS, Operation.ONE_OF],
        strategy.rule("role"),
    )
    people.register_relation("pets", strategy.relation("pets"), pets)
    return people


def _build(payload: Any, config: Configuration | None = None) -> tuple[Any, ErrorSink]:
    config = config or _schema()
    sink = ErrorSink()
    return config.builder.make_group(payload, sink), sink


def _codes(sink: ErrorSink) -> list[str]:
    return [issue.code for issue in sink]


class TestMakeGroup:
    def test_valid_group(self) -> None:
        bound, sink = _build(group("and", rule("name", "equals", "Alice")))
        assert len(sink) == 0
        assert bound == ("group", "and", [("rule", "name", "equals", "Alice")])

    @pytest.mark.parametrize(
        "payload",
        [
            {"operation": "and", "children": []},
            {"type": "group", "children": []},
            {"type": "group", "operation": "and"},
            {"type": "rule", "operation": "and", "children": []},
            {"type": "group", "operation": 1, "children": []},
            {"type": "group", "operation": "and", "children": "nope"},
            ["not", "a", "map"],
            None,
        ],
    )
    def test_malformed_group_yields_one_error(self, payload: Any) -> None:
        bound, sink = _build(payload)
        assert bound is None
        assert _codes(sink) == ["invalid_group"]
        assert sink.messages == ["Invalid group"]
        assert sink.issues[0].field is None

    def test_unknown_group_operation(self) -> None:
        bound, sink = _build(group("xor", rule("age", "equals", "not a number")))
        assert bound is None
        # Children are not visited when the group itself is invalid.
        assert _codes(sink) == ["invalid_group"]

    def test_nested_groups(self) -> None:
        payload = group(
            "or",
            group("and", rule("name", "starts_with", "Al")),
            rule("age", "greater_than", 18),
        )
        bound, sink = _build(payload)
        assert len(sink) == 0
        assert bound == (
            "group",
            "or",
            [
                ("group", "and", [("rule", "name", "starts_with", "Al")]),
                ("rule", "age", "greater_than", 18),
            ],
        )

    def test_empty_group_is_bound(self) -> None:
        bound, sink = _build(group("and"))
        assert len(sink) == 0
        assert bound == ("group", "and", [])

    def test_group_errors_are_sum_of_children(self) -> None:
        payload = group(
            "and",
            rule("age", "equals", "old"),
            rule("name", "equals", "Alice"),
            rule("role", "one_of", []),
        )
        bound, sink = _build(payload)
        assert _codes(sink) == ["invalid_value", "empty_array"]
        assert bound == ("group", "and", [("rule", "name", "equals", "Alice")])

    def test_tuple_children_accepted(self) -> None:
        payload = {"type": "group", "operation": "and", "children": (rule("age", "equals", 1),)}
        bound, sink = _build(payload)
        assert len(sink) == 0
        assert bound == ("group", "and", [("rule", "age", "equals", 1)])


class TestMakeChildren:
    def test_non_mapping_children_are_skipped(self) -> None:
        sink = ErrorSink()
        children = _schema().builder.make_children(
            [1, "x", None, [rule("age", "equals", 1)], 2.5], sink
        )
        assert children == []
        assert len(sink) == 0

    def test_unclassifiable_mapping_is_skipped(self) -> None:
        sink = ErrorSink()
        children = _schema().builder.make_children(
            [{"foo": "bar"}, {"name": 42, "operation": "equals", "value": 1}], sink
        )
        assert children == []
        assert len(sink) == 0

    def test_unknown_name(self) -> None:
        sink = ErrorSink()
        children = _schema().builder.make_children(
            [rule("height", "equals", 180), rule("age", "equals", 30)], sink
        )
        assert children == [("rule", "age", "equals", 30)]
        assert _codes(sink) == ["missing_configuration_entry"]
        assert sink.messages == ["Configuration doesn't contain an entry with name 'height'"]
        assert sink.issues[0].field == "height"

    def test_order_preserved(self) -> None:
        sink = ErrorSink()
        children = _schema().builder.make_children(
            [
                rule("name", "equals", "a"),
                rule("age", "equals", None),
                group("or"),
                rule("role", "equals", "admin"),
            ],
            sink,
        )
        assert children == [
            ("rule", "name", "equals", "a"),
            ("group", "or", []),
            ("rule", "role", "equals", "admin"),
        ]


class TestRuleValidation:
    def _entry_build(self, payload: dict[str, Any], **kwargs: Any) -> tuple[Any, ErrorSink]:
        config = _schema(**kwargs)
        sink = ErrorSink()
        entry = config.lookup(payload["name"])
        return config.builder.make_for_entry(entry, payload, sink), sink

    def test_missing_value_key(self) -> None:
        bound, sink = self._entry_build({"name": "age", "operation": "equals"})
        assert bound is None
        assert _codes(sink) == ["invalid_rule"]
        assert sink.messages == ["Invalid rule for field 'age'"]

    def test_non_string_operation(self) -> None:
        bound, sink = self._entry_build({"name": "age", "operation": 3, "value": 1})
        assert bound is None
        assert _codes(sink) == ["invalid_rule"]

    def test_unknown_operation_stops_further_checks(self) -> None:
        bound, sink = self._entry_build(rule("age", "between", None))
        assert bound is None
        assert _codes(sink) == ["invalid_operation"]
        assert sink.messages == ["Invalid operation for 'age'"]

    def test_unsupported_operation_is_reported_and_still_bound(self) -> None:
        bound, sink = self._entry_build(rule("status", "starts_with", "act"))
        assert bound == ("rule", "status", "starts_with", "act")
        assert _codes(sink) == ["unsupported_operation"]
        assert sink.messages == ["Operation is not supported for 'status'"]

    def test_null_value_reports_empty_and_invalid(self) -> None:
        bound, sink = self._entry_build(rule("status", "equals", None))
        assert bound is None
        assert _codes(sink) == ["empty_value", "invalid_value"]

    def test_checks_run_in_order_without_short_circuit(self) -> None:
        def name_validation(value: Any, fail: Any) -> None:
            fail("Name is required")
            fail(ErrorFieldCode.INVALID_VALUE)

        config = _schema()
        config.register_rule(
            "name",
            ConstraintType.STRING,
            [Operation.EQUALS],
            RecordingStrategy().rule("name"),
            name_validation,
        )
        sink = ErrorSink()
        entry = config.lookup("name")
        bound = config.builder.make_for_entry(entry, rule("name", "one_of", None), sink)
        assert bound is None
        assert _codes(sink) == [
            "unsupported_operation",
            "custom",
            "invalid_value",
            "empty_value",
            "invalid_value",
        ]
        assert sink.messages[1] == "Name is required"
        assert all(issue.field == "name" for issue in sink)

    def test_extra_validation_does_not_block_binding(self) -> None:
        bound, sink = self._entry_build(
            rule("name", "equals", "x"),
            name_validation=lambda value, fail: fail("Too short"),
        )
        assert bound == ("rule", "name", "equals", "x")
        assert sink.messages == ["Too short"]

    @pytest.mark.parametrize(
        "name,operation,value",
        [
            ("name", "equals", "Alice"),
            ("name", "starts_with", ""),
            ("name", "one_of", ["a", 1, 2.5]),
            ("name", "one_of", []),
            ("age", "equals", 30),
            ("age", "greater_than", 1.5),
            ("age", "one_of", [1, 2]),
            ("role", "equals", "admin"),
            ("role", "equals", 3),
            ("role", "equals", 3.5),
            ("role", "one_of", ["admin"]),
        ],
    )
    def test_accepted_values(self, name: str, operation: str, value: Any) -> None:
        bound, sink = self._entry_build(rule(name, operation, value))
        assert len(sink) == 0
        assert bound == ("rule", name, operation, value)

    @pytest.mark.parametrize(
        "name,operation,value",
        [
            ("name", "equals", 1),
            ("name", "equals", ["a"]),
            ("name", "one_of", "a"),
            ("name", "one_of", ["a", None]),
            ("name", "one_of", [["nested"]]),
            ("age", "equals", "30"),
            ("age", "equals", True),
            ("age", "one_of", [1, False]),
            ("role", "equals", {"x": 1}),
            ("role", "equals", False),
        ],
    )
    def test_rejected_values(self, name: str, operation: str, value: Any) -> None:
        bound, sink = self._entry_build(rule(name, operation, value))
        assert bound is None
        assert _codes(sink) == ["invalid_value"]

    def test_dropdown_one_of_empty_list(self) -> None:
        bound, sink = self._entry_build(rule("role", "one_of", []))
        assert bound is None
        assert _codes(sink) == ["empty_array"]
        assert sink.messages == ["Field 'role' must contain values"]


class TestRelationValidation:
    def test_valid_relation(self) -> None:
        bound, sink = _build(group("and", relation("pets", "or", rule("species", "equals", "cat"))))
        assert len(sink) == 0
        assert bound == (
            "group",
            "and",
            [("relation", "pets", "or", [("rule", "species", "equals", "cat")])],
        )

    def test_relation_missing_children(self) -> None:
        bound, sink = _build(group("and", {"name": "pets", "operation": "and"}))
        assert bound == ("group", "and", [])
        assert _codes(sink) == ["invalid_rule"]
        assert sink.messages == ["Invalid rule for field 'pets'"]

    def test_relation_unknown_operation(self) -> None:
        _, sink = _build(group("and", relation("pets", "nand", rule("species", "equals", 1))))
        assert _codes(sink) == ["invalid_operation"]
        assert sink.messages == ["Invalid operation for 'pets'"]

    def test_empty_relation(self) -> None:
        bound, sink = _build(group("and", relation("pets", "and")))
        assert bound == ("group", "and", [])
        assert _codes(sink) == ["empty_relation"]
        assert sink.messages == ["A relation must contain rules"]

    def test_nested_errors_use_nested_entry_names(self) -> None:
        payload = group(
            "and",
            relation(
                "pets",
                "and",
                rule("species", "starts_with", "c"),
                rule("age", "equals", 3),
                rule("species", "equals", "cat"),
            ),
        )
        bound, sink = _build(payload)
        assert sink.messages == [
            "Operation is not supported for 'species'",
            "Configuration doesn't contain an entry with name 'age'",
        ]
        assert bound == (
            "group",
            "and",
            [
                (
                    "relation",
                    "pets",
                    "and",
                    [
                        ("rule", "species", "starts_with", "c"),
                        ("rule", "species", "equals", "cat"),
                    ],
                )
            ],
        )

    def test_relation_bound_even_if_all_children_fail(self) -> None:
        bound, sink = _build(group("and", relation("pets", "or", rule("species", "equals", 1))))
        assert _codes(sink) == ["invalid_value"]
        assert bound == ("group", "and", [("relation", "pets", "or", [])])

    def test_groups_inside_relations(self) -> None:
        payload = group(
            "and",
            relation(
                "pets",
                "and",
                group("or", relation("toys", "and", rule("toy", "equals", "ball"))),
            ),
        )
        bound, sink = _build(payload)
        assert len(sink) == 0
        assert bound == (
            "group",
            "and",
            [
                (
                    "relation",
                    "pets",
                    "and",
                    [
                        (
                            "group",
                            "or",
                            [("relation", "toys", "and", [("rule", "toy", "equals", "ball")])],
                        )
                    ],
                )
            ],
        )


class TestDepthLimit:
    def test_within_limit(self) -> None:
        config = _schema(BuilderConfig(max_depth=2))
        bound, sink = _build(group("and", group("or")), config)
        assert len(sink) == 0
        assert bound == ("group", "and", [("group", "or", [])])

    def test_nested_group_too_deep(self) -> None:
        config = _schema(BuilderConfig(max_depth=2))
        payload = group("and", group("or", group("and", rule("age", "equals", "bad"))))
        bound, sink = _build(payload, config)
        assert _codes(sink) == ["max_depth_exceeded"]
        assert sink.messages == ["Filter is nested too deeply"]
        assert bound == ("group", "and", [("group", "or", [])])

    def test_relation_counts_as_nesting(self) -> None:
        config = _schema(BuilderConfig(max_depth=1))
        payload = group("and", relation("pets", "and", rule("species", "equals", "cat")))
        bound, sink = _build(payload, config)
        assert _codes(sink) == ["max_depth_exceeded"]
        assert bound == ("group", "and", [])

    def test_depth_accumulates_across_configurations(self) -> None:
        config = _schema(BuilderConfig(max_depth=2))
        payload = group(
            "and",
            relation("pets", "and", group("or", rule("species", "equals", "cat"))),
        )
        bound, sink = _build(payload, config)
        assert _codes(sink) == ["max_depth_exceeded"]
        assert bound == ("group", "and", [("relation", "pets", "and", [])])

    def test_deeply_nested_payload_does_not_exhaust_stack(self) -> None:
        payload: dict[str, Any] = group("and")
        for _ in range(5000):
            payload = group("and", payload)
        bound, sink = _build(payload)
        assert _codes(sink) == ["max_depth_exceeded"]
        assert bound is not None

    def test_ceiling_group_nesting_fits_the_stack(self) -> None:
        config = _schema(BuilderConfig(max_depth=MAX_DEPTH_CEILING))
        payload: dict[str, Any] = group("and")
        for _ in range(MAX_DEPTH_CEILING + 50):
            payload = group("and", payload)
        _, sink = _build(payload, config)
        assert _codes(sink) == ["max_depth_exceeded"]

    def test_ceiling_relation_nesting_fits_the_stack(self) -> None:
        strategy = RecordingStrategy()
        tree = Configuration(strategy, config=BuilderConfig(max_depth=MAX_DEPTH_CEILING))
        tree.register_relation("child", strategy.relation("child"), tree)
        node: dict[str, Any] = group("and")
        for _ in range(MAX_DEPTH_CEILING + 50):
            node = relation("child", "and", node)
        bound, sink = _build(group("and", node), tree)
        assert _codes(sink) == ["max_depth_exceeded"]
        assert bound is not None
