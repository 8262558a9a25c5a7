"""Canonical issue codes reported by the DDL parser."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Bounded codes for parse diagnostics."""

    TOKENIZE_FAILED = "TOKENIZE_FAILED"
    MALFORMED_STATEMENT = "MALFORMED_STATEMENT"
    MALFORMED_COLUMN = "MALFORMED_COLUMN"
    UNSUPPORTED_CONSTRAINT = "UNSUPPORTED_CONSTRAINT"
    DUPLICATE_TABLE = "DUPLICATE_TABLE"
    DUPLICATE_COLUMN = "DUPLICATE_COLUMN"
    UNRESOLVED_REFERENCE = "UNRESOLVED_REFERENCE"
    CONFLICTING_REFERENCE = "CONFLICTING_REFERENCE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


_CODE_GROUPS: dict[ErrorCode, str] = {
    ErrorCode.TOKENIZE_FAILED: "SYNTAX",
    ErrorCode.MALFORMED_STATEMENT: "SYNTAX",
    ErrorCode.MALFORMED_COLUMN: "SYNTAX",
    ErrorCode.UNSUPPORTED_CONSTRAINT: "UNMODELED",
    ErrorCode.DUPLICATE_TABLE: "CONFLICT",
    ErrorCode.DUPLICATE_COLUMN: "CONFLICT",
    ErrorCode.UNRESOLVED_REFERENCE: "REFERENCE",
    ErrorCode.CONFLICTING_REFERENCE: "CONFLICT",
    ErrorCode.INTERNAL_ERROR: "INTERNAL",
}


def error_code_group(code: ErrorCode | str) -> str:
    """Return the coarse group for an error code."""
    try:
        normalized = ErrorCode(code)
    except ValueError:
        return "INTERNAL"
    return _CODE_GROUPS.get(normalized, "INTERNAL")
