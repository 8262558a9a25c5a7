"""DDL parsing: CREATE TABLE text to a structured Schema."""

from .extraction import ResponsePart, extract_sql, split_response
from .inference import infer_relationships, singularize, table_name_variations
from .parser import (
    DdlParser,
    IssueSeverity,
    ParseIssue,
    ParseMode,
    ParseReport,
    parse_sql,
    parse_sql_with_report,
)
from .tokens import split_clauses
from .types import normalize_type

__all__ = [
    "DdlParser",
    "IssueSeverity",
    "ParseIssue",
    "ParseMode",
    "ParseReport",
    "ResponsePart",
    "extract_sql",
    "infer_relationships",
    "normalize_type",
    "parse_sql",
    "parse_sql_with_report",
    "singularize",
    "split_clauses",
    "split_response",
    "table_name_variations",
]
