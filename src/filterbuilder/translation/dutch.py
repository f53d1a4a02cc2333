"""Dutch error messages."""

from __future__ import annotations

from filterbuilder.domain.errors import ErrorCode, ErrorFieldCode
from filterbuilder.translation.base import Translation

_ERRORS: dict[ErrorCode, str] = {
    ErrorCode.INVALID_CONFIGURATION: "Ongeldige configuratie",
    ErrorCode.INVALID_GROUP: "Ongeldige groep",
    ErrorCode.INVALID_GROUP_OPERATION: "Ongeldige operatie voor een groep",
    ErrorCode.INVALID_RULE: "Ongeldige regel",
    ErrorCode.MAX_DEPTH_EXCEEDED: "De filter is te diep genest",
}

_FIELD_ERRORS: dict[ErrorFieldCode, str] = {
    ErrorFieldCode.EMPTY_ARRAY: "Het veld '{field}' moet waarden bevatten",
    ErrorFieldCode.EMPTY_RELATION: "Een relatie moet regels bevatten",
    ErrorFieldCode.EMPTY_VALUE: "De waarde voor '{field}' mag niet leeg zijn",
    ErrorFieldCode.INVALID_OPERATION: "Ongeldige operatie voor '{field}'",
    ErrorFieldCode.INVALID_RULE: "Ongeldige regel voor '{field}'",
    ErrorFieldCode.INVALID_VALUE: "Ongeldige waarde voor '{field}'",
    ErrorFieldCode.MISSING_CONFIGURATION_ENTRY: (
        "De configuratie bevat geen regel voor '{field}'"
    ),
    ErrorFieldCode.UNSUPPORTED_OPERATION: "De operatie voor '{field}' wordt niet ondersteund",
}


class Dutch(Translation):
    @property
    def locale(self) -> str:
        return "nl"

    def translate_error(self, error: ErrorCode) -> str:
        return _ERRORS[error]

    def translate_error_with_field(self, error: ErrorFieldCode, field: str) -> str:
        return _FIELD_ERRORS[error].format(field=field)
