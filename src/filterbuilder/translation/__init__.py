"""Translation registry.

Built-in locales are registered at import time; host applications may add
their own with :func:`register_translation`.
"""

from __future__ import annotations

from filterbuilder.exceptions import UnknownLocale
from filterbuilder.translation.base import Translation
from filterbuilder.translation.dutch import Dutch
from filterbuilder.translation.english import English

TRANSLATION_REGISTRY: dict[str, Translation] = {}


def register_translation(translation: Translation) -> None:
    """Add (or replace) the translation for ``translation.locale``."""
    TRANSLATION_REGISTRY[translation.locale] = translation


def get_translation(locale: str) -> Translation:
    """Return the registered translation for *locale*.

    Raises:
        UnknownLocale: If nothing is registered under *locale*.
    """
    try:
        return TRANSLATION_REGISTRY[locale]
    except KeyError:
        available = ", ".join(sorted(TRANSLATION_REGISTRY))
        msg = f"Unknown locale {locale!r} (available: {available})"
        raise UnknownLocale(msg) from None


def _register_translations() -> None:
    register_translation(English())
    register_translation(Dutch())


_register_translations()

__all__ = [
    "TRANSLATION_REGISTRY",
    "Dutch",
    "English",
    "Translation",
    "get_translation",
    "register_translation",
]
