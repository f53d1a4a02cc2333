"""English error messages."""

from __future__ import annotations

from filterbuilder.domain.errors import ErrorCode, ErrorFieldCode
from filterbuilder.translation.base import Translation

_ERRORS: dict[ErrorCode, str] = {
    ErrorCode.INVALID_CONFIGURATION: "Invalid configuration",
    ErrorCode.INVALID_GROUP: "Invalid group",
    ErrorCode.INVALID_GROUP_OPERATION: "Invalid operation for a group",
    ErrorCode.INVALID_RULE: "Invalid rule",
    ErrorCode.MAX_DEPTH_EXCEEDED: "Filter is nested too deeply",
}

_FIELD_ERRORS: dict[ErrorFieldCode, str] = {
    ErrorFieldCode.EMPTY_ARRAY: "Field '{field}' must contain values",
    ErrorFieldCode.EMPTY_RELATION: "A relation must contain rules",
    ErrorFieldCode.EMPTY_VALUE: "Value for '{field}' cannot be empty",
    ErrorFieldCode.INVALID_OPERATION: "Invalid operation for '{field}'",
    ErrorFieldCode.INVALID_RULE: "Invalid rule for field '{field}'",
    ErrorFieldCode.INVALID_VALUE: "Invalid value for '{field}'",
    ErrorFieldCode.MISSING_CONFIGURATION_ENTRY: (
        "Configuration doesn't contain an entry with name '{field}'"
    ),
    ErrorFieldCode.UNSUPPORTED_OPERATION: "Operation is not supported for '{field}'",
}


class English(Translation):
    @property
    def locale(self) -> str:
        return "en"

    def translate_error(self, error: ErrorCode) -> str:
        return _ERRORS[error]

    def translate_error_with_field(self, error: ErrorFieldCode, field: str) -> str:
        return _FIELD_ERRORS[error].format(field=field)
