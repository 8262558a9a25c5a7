"""Lightweight dialect checks for CREATE TABLE scripts before deployment."""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Tuple

import sqlglot
from pydantic import BaseModel, Field
from sqlglot.errors import ParseError, TokenError

from common.sql.statements import split_sql_statements

from .dialects import DialectLike, SqlDialect, resolve_dialect, to_sqlglot_dialect

logger = logging.getLogger(__name__)


class SqlValidationResult(BaseModel):
    """Outcome of ``validate_sql``; warnings never make a script invalid."""

    valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


@dataclass(frozen=True)
class _Rule:
    pattern: "re.Pattern[str]"
    message: str
    is_error: bool = True


_MISSING_COLUMNS_RULE = _Rule(
    re.compile(r"^\s*CREATE\s+TABLE\b(?!.*\()", re.I | re.S),
    "CREATE TABLE statement missing column definitions",
)

_DIALECT_RULES: Dict[SqlDialect, Tuple[_Rule, ...]] = {
    SqlDialect.POSTGRESQL: (
        _Rule(
            re.compile(r"\bAUTO_INCREMENT\b", re.I),
            "Use SERIAL or GENERATED ALWAYS AS IDENTITY instead of AUTO_INCREMENT in PostgreSQL",
        ),
        _Rule(re.compile(r"\bENGINE\s*=", re.I), "ENGINE clause is not supported in PostgreSQL"),
    ),
    SqlDialect.MYSQL: (
        _Rule(
            re.compile(r"\b(?:BIG)?SERIAL\b", re.I),
            "Use AUTO_INCREMENT instead of SERIAL in MySQL",
        ),
        _Rule(
            re.compile(r"\bBOOLEAN\b", re.I),
            "Consider using TINYINT(1) instead of BOOLEAN in MySQL for better compatibility",
            is_error=False,
        ),
    ),
    SqlDialect.SQLITE: (
        _Rule(
            re.compile(r"\bAUTO_INCREMENT\b", re.I),
            "Use AUTOINCREMENT instead of AUTO_INCREMENT in SQLite",
        ),
    ),
}


def validate_sql(sql: str, dialect: DialectLike = None) -> SqlValidationResult:
    """Check ``sql`` against known cross-dialect mistakes.

    Rule violations are reported once per script. A statement sqlglot cannot parse
    is reported as a warning. Never raises.
    """
    resolved = resolve_dialect(dialect)
    rules = (_MISSING_COLUMNS_RULE, *_DIALECT_RULES[resolved])
    errors: List[str] = []
    warnings: List[str] = []

    for statement in split_sql_statements(sql):
        for rule in rules:
            if not rule.pattern.search(statement):
                continue
            bucket = errors if rule.is_error else warnings
            if rule.message not in bucket:
                bucket.append(rule.message)

    read = to_sqlglot_dialect(resolved)
    try:
        sqlglot.parse(sql or "", read=read)
    except (ParseError, TokenError) as exc:
        first_line = str(exc).splitlines()[0] if str(exc) else type(exc).__name__
        warnings.append(f"sqlglot could not parse the script: {first_line}")
        logger.debug("sqlglot parse failed for %s: %s", read, exc)

    return SqlValidationResult(valid=not errors, errors=errors, warnings=warnings)
