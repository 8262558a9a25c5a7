"""Common error taxonomy helpers."""

from common.errors.error_codes import ErrorCode, error_code_group
from common.errors.exceptions import SchemaDesignerError, SchemaParseError

__all__ = [
    "ErrorCode",
    "SchemaDesignerError",
    "SchemaParseError",
    "error_code_group",
]
