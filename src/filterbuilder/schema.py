"""Configuration — the schema a filter payload is validated against.

A Configuration is declared once (rules and relations registered up front),
then reused read-only for any number of :meth:`Configuration.build_filter`
calls. Each call allocates its own ErrorSink, so concurrent builds against
the same Configuration do not interfere.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any, Self

from filterbuilder.config.models import BuilderConfig
from filterbuilder.config.settings import FilterBuilderSettings
from filterbuilder.domain.entries import (
    ExtraValidation,
    RelationBindFn,
    RelationEntry,
    RuleBindFn,
    RuleEntry,
    SchemaEntry,
)
from filterbuilder.domain.errors import ErrorCode, ErrorFieldCode
from filterbuilder.domain.types import ConstraintType, Operation
from filterbuilder.exceptions import (
    InvalidConfiguration,
    MissingConfigurationEntry,
    ValidationFailure,
)
from filterbuilder.services.builder import FilterBuilder
from filterbuilder.services.result import BuildResult
from filterbuilder.services.sink import ErrorSink, ValidationIssue
from filterbuilder.strategies.base import Strategy
from filterbuilder.translation import Translation, get_translation

logger = logging.getLogger(__name__)


class Configuration:
    """Named registry of rule and relation entries bound to a Strategy.

    Args:
        strategy: Evaluation policy used to bind groups.
        translation: Translation instance or locale code. Defaults to
            ``config.locale``.
        config: Runtime knobs (nesting limit, default locale).
        builder_factory: Called with the new Configuration to create its
            builder. Defaults to :class:`FilterBuilder`.

    Usage::

        strategy = ObjectStrategy()
        people = Configuration(strategy)
        people.register_rule(
            "status", ConstraintType.STRING, [Operation.EQUALS], strategy.make_rule("status")
        )
        flt = people.build_filter(payload)
        matches = [p for p in persons if flt.adheres(p)]
    """

    def __init__(
        self,
        strategy: Strategy,
        translation: Translation | str | None = None,
        *,
        config: BuilderConfig | None = None,
        builder_factory: Callable[[Configuration], FilterBuilder] | None = None,
    ) -> None:
        self._strategy = strategy
        self._config = config or BuilderConfig()
        if translation is None:
            translation = self._config.locale
        if isinstance(translation, str):
            translation = get_translation(translation)
        self._translation = translation
        self._entries: dict[str, SchemaEntry] = {}
        self._builder = (builder_factory or FilterBuilder)(self)

    @classmethod
    def from_settings(
        cls,
        strategy: Strategy,
        settings: FilterBuilderSettings,
        translation: Translation | str | None = None,
        builder_factory: Callable[[Configuration], FilterBuilder] | None = None,
    ) -> Self:
        """Create a Configuration using the [builder] section of *settings*."""
        return cls(
            strategy, translation, config=settings.builder, builder_factory=builder_factory
        )

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    @property
    def translation(self) -> Translation:
        return self._translation

    @property
    def config(self) -> BuilderConfig:
        return self._config

    @property
    def builder(self) -> FilterBuilder:
        return self._builder

    @property
    def entries(self) -> Mapping[str, SchemaEntry]:
        """Read-only view of the registered entries."""
        return MappingProxyType(self._entries)

    def has(self, name: str) -> bool:
        return name in self._entries

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def lookup(self, name: str) -> SchemaEntry:
        """Return the entry registered under *name*.

        Raises:
            MissingConfigurationEntry: If no entry has that name.
        """
        try:
            return self._entries[name]
        except KeyError:
            message = self._translation.translate_error_with_field(
                ErrorFieldCode.MISSING_CONFIGURATION_ENTRY, name
            )
            raise MissingConfigurationEntry(name, message) from None

    def register_rule(
        self,
        name: str,
        constraint_type: ConstraintType,
        supported_operations: Iterable[Operation],
        bind_fn: RuleBindFn,
        extra_validation: ExtraValidation | None = None,
    ) -> Self:
        """Register a rule entry; a later registration with the same name wins.

        Raises:
            SchemaDeclarationError: If an operation is not permitted for
                *constraint_type*.
        """
        self._entries[name] = RuleEntry(
            name=name,
            constraint_type=constraint_type,
            supported_operations=frozenset(supported_operations),
            bind_fn=bind_fn,
            extra_validation=extra_validation,
        )
        logger.debug("Registered rule entry: %s (%s)", name, constraint_type)
        return self

    def register_relation(
        self,
        name: str,
        bind_fn: RelationBindFn,
        configuration: Configuration,
    ) -> Self:
        """Register a relation whose children are validated by *configuration*."""
        self._entries[name] = RelationEntry(
            name=name,
            bind_fn=bind_fn,
            configuration=configuration,
        )
        logger.debug("Registered relation entry: %s", name)
        return self

    def validate(self, payload: Any) -> BuildResult:
        """Build *payload* without raising; every issue is returned."""
        sink = ErrorSink()
        bound = self._builder.make_group(payload, sink)
        issues = len(sink)
        logger.debug("Built filter payload with %d issue(s)", issues, extra={"issues": issues})
        if len(sink) > 0 or bound is None:
            return BuildResult(ok=False, issues=list(sink.issues))
        return BuildResult(ok=True, filter=bound)

    def build_filter(self, payload: Any) -> Any:
        """Turn *payload* into a bound filter.

        Raises:
            ValidationFailure: Carrying every issue found in the payload.
            InvalidConfiguration: If no issue was found yet nothing was built.
        """
        result = self.validate(payload)
        if result.issues:
            raise ValidationFailure(result.issues)
        if result.filter is None:
            issue = ValidationIssue(
                code=ErrorCode.INVALID_CONFIGURATION.value,
                message=self._translation.translate_error(ErrorCode.INVALID_CONFIGURATION),
            )
            raise InvalidConfiguration([issue])
        return result.filter
