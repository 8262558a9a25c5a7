"""Dialect-aware SQL generation from a Schema."""

from .convert import convert_sql
from .dialects import (
    DIALECT_ALIASES,
    DialectLike,
    SqlDialect,
    lookup_dialect,
    resolve_dialect,
    to_sqlglot_dialect,
)
from .generator import generate_schema_sql, generate_table_sql, render_column
from .prompts import generate_system_prompt
from .syntax import DIALECT_SYNTAX, DialectSyntax, get_syntax
from .types import map_data_type
from .validation import SqlValidationResult, validate_sql

__all__ = [
    "DIALECT_ALIASES",
    "DIALECT_SYNTAX",
    "DialectLike",
    "DialectSyntax",
    "SqlDialect",
    "SqlValidationResult",
    "convert_sql",
    "generate_schema_sql",
    "generate_system_prompt",
    "generate_table_sql",
    "get_syntax",
    "lookup_dialect",
    "map_data_type",
    "render_column",
    "resolve_dialect",
    "to_sqlglot_dialect",
    "validate_sql",
]
