"""Evaluation strategies — how bound groups, rules and relations execute."""

from filterbuilder.strategies.base import BoundFilter, Strategy
from filterbuilder.strategies.object import ObjectBoundFilter, ObjectStrategy

__all__ = ["BoundFilter", "ObjectBoundFilter", "ObjectStrategy", "Strategy"]
