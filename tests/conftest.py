"""Shared pytest fixtures and test helpers for filterbuilder tests."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from filterbuilder.domain.types import ConstraintType, Operation
from filterbuilder.schema import Configuration
from filterbuilder.strategies.object import ObjectStrategy


@dataclass
class Pet:
    species: str
    legs: int


@dataclass
class Person:
    name: str = "Alice"
    age: int = 30
    status: str = "active"
    role: str = "admin"
    pets: list[Pet] = field(default_factory=list)


@pytest.fixture
def strategy() -> ObjectStrategy:
    return ObjectStrategy()


@pytest.fixture
def pets_config(strategy: ObjectStrategy) -> Configuration:
    """Schema for a person's pets."""
    config = Configuration(strategy)
    config.register_rule(
        "species",
        ConstraintType.STRING,
        [Operation.EQUALS, Operation.ONE_OF],
        strategy.make_rule("species"),
    )
    config.register_rule(
        "legs",
        ConstraintType.NUMBER,
        [Operation.EQUALS, Operation.GREATER_THAN],
        strategy.make_rule("legs"),
    )
    return config


@pytest.fixture
def people_config(strategy: ObjectStrategy, pets_config: Configuration) -> Configuration:
    """Schema for people: string, number, dropdown rules and a pets relation.

    ``status`` deliberately supports only ``equals``.
    """
    config = Configuration(strategy)
    config.register_rule(
        "name",
        ConstraintType.STRING,
        [Operation.EQUALS, Operation.STARTS_WITH, Operation.ONE_OF],
        strategy.make_rule("name"),
    )
    config.register_rule(
        "status",
        ConstraintType.STRING,
        [Operation.EQUALS],
        strategy.make_rule("status"),
    )
    config.register_rule(
        "age",
        ConstraintType.NUMBER,
        [Operation.EQUALS, Operation.LESS_THAN, Operation.GREATER_THAN, Operation.ONE_OF],
        strategy.make_rule("age"),
    )
    config.register_rule(
        "role",
        ConstraintType.DROPDOWN,
        [Operation.EQUALS, Operation.ONE_OF],
        strategy.make_rule("role"),
    )
    config.register_relation("pets", strategy.make_relation("pets"), pets_config)
    return config


# ---------------------------------------------------------------------------
# Payload helpers (used across test modules)
# ---------------------------------------------------------------------------


def group(operation: str, *children: object) -> dict[str, object]:
    """Build a group payload node."""
    return {"type": "group", "operation": operation, "children": list(children)}


def rule(name: str, operation: str, value: object) -> dict[str, object]:
    """Build a rule payload node."""
    return {"name": name, "operation": operation, "value": value}


def relation(name: str, operation: str, *children: object) -> dict[str, object]:
    """Build a relation payload node."""
    return {"name": name, "operation": operation, "children": list(children)}
