"""Unified settings — init kwargs, env vars, and TOML file in one object.

Priority chain (highest to lowest):
  1. Init kwargs   — overrides passed to :meth:`FilterBuilderSettings.load`
  2. Env vars      — ``FILTERBUILDER_*`` prefix, ``__`` for nested sections
  3. TOML file     — ``filterbuilder.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the walk-up discovery from :mod:`filterbuilder.config.discovery`.
"""

from __future__ import annotations

import threading
from logging import Handler
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from filterbuilder.config.discovery import find_config, read_toml
from filterbuilder.config.logging import configure_logging
from filterbuilder.config.models import BuilderConfig, LoggingConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``filterbuilder.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class FilterBuilderSettings(BaseSettings):
    """Runtime settings for filterbuilder.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        builder: Defaults for every Configuration built with these settings.
        logging: Log routing applied by :meth:`configure_logging`.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FILTERBUILDER_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    builder: BuilderConfig = Field(default_factory=BuilderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> FilterBuilderSettings:
        """Construct settings, discovering ``filterbuilder.toml`` from *start*.

        An explicit *config_path* skips discovery. *overrides* take
        priority over every other source.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None

    def configure_logging(self, **kwargs: Any) -> Handler:
        """Apply the [logging] section; see :func:`configure_logging`."""
        return configure_logging(self.logging, **kwargs)
