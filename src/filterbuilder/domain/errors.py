"""Abstract error codes, localized by a Translation before reporting."""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Errors that are not tied to a named schema entry."""

    INVALID_CONFIGURATION = "invalid_configuration"
    INVALID_GROUP = "invalid_group"
    INVALID_GROUP_OPERATION = "invalid_group_operation"
    INVALID_RULE = "invalid_rule"
    MAX_DEPTH_EXCEEDED = "max_depth_exceeded"


class ErrorFieldCode(StrEnum):
    """Errors reported against a named schema entry."""

    EMPTY_ARRAY = "empty_array"
    EMPTY_RELATION = "empty_relation"
    EMPTY_VALUE = "empty_value"
    INVALID_OPERATION = "invalid_operation"
    INVALID_RULE = "invalid_rule"
    INVALID_VALUE = "invalid_value"
    MISSING_CONFIGURATION_ENTRY = "missing_configuration_entry"
    UNSUPPORTED_OPERATION = "unsupported_operation"


# Code recorded for free-form messages raised by extra-validation callbacks.
CUSTOM_ERROR_CODE = "custom"
