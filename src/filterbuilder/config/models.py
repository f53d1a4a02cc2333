"""Pydantic settings models with code-baked defaults.

Sparse TOML contract: defaults baked here, filterbuilder.toml only
contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# Upper bound for max_depth. A build uses at most three frames per level,
# which keeps it inside the default recursion limit.
MAX_DEPTH_CEILING = 256


class BuilderConfig(BaseModel):
    """[builder] section."""

    model_config = {"frozen": True}

    # Groups and relations each add one level of nesting.
    max_depth: int = Field(default=32, ge=1, le=MAX_DEPTH_CEILING)
    locale: str = "en"


class LoggingConfig(BaseModel):
    """[logging] section, consumed by :func:`filterbuilder.config.logging.configure_logging`."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False
