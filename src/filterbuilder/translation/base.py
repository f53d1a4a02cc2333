"""Translation contract: abstract error code to human-readable message."""

from __future__ import annotations

from abc import ABC, abstractmethod

from filterbuilder.domain.errors import ErrorCode, ErrorFieldCode


class Translation(ABC):
    """Localizes error codes for one language."""

    @property
    @abstractmethod
    def locale(self) -> str:
        """Locale code (e.g. 'en', 'nl')."""
        ...

    @abstractmethod
    def translate_error(self, error: ErrorCode) -> str:
        """Message for an error that is not tied to a field."""
        ...

    @abstractmethod
    def translate_error_with_field(self, error: ErrorFieldCode, field: str) -> str:
        """Message for an error reported against the entry named *field*."""
        ...
