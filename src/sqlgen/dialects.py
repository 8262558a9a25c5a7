"""Supported SQL dialect families and alias resolution."""

import logging
from enum import Enum
from typing import Dict, Optional, Union

from common.config.designer import get_settings
from common.sql.dialect import normalize_sqlglot_dialect

logger = logging.getLogger(__name__)


class SqlDialect(str, Enum):
    """Target SQL families for generated DDL."""

    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    SQLITE = "sqlite"

    def __str__(self) -> str:
        return self.value


# Host labels (connection providers, UI names) -> dialect family.
DIALECT_ALIASES: Dict[str, SqlDialect] = {
    "postgresql": SqlDialect.POSTGRESQL,
    "postgres": SqlDialect.POSTGRESQL,
    "pg": SqlDialect.POSTGRESQL,
    "postgres-local": SqlDialect.POSTGRESQL,
    "postgres-like": SqlDialect.POSTGRESQL,
    "supabase": SqlDialect.POSTGRESQL,
    "mysql": SqlDialect.MYSQL,
    "mysql-local": SqlDialect.MYSQL,
    "mysql-like": SqlDialect.MYSQL,
    "planetscale": SqlDialect.MYSQL,
    "mariadb": SqlDialect.MYSQL,
    "sqlite": SqlDialect.SQLITE,
    "sqlite3": SqlDialect.SQLITE,
    "sqlite-like": SqlDialect.SQLITE,
}

DialectLike = Union[SqlDialect, str, None]


def lookup_dialect(name: DialectLike) -> Optional[SqlDialect]:
    """Return the family for ``name`` or None when it is not recognized."""
    if isinstance(name, SqlDialect):
        return name
    if not name:
        return None
    return DIALECT_ALIASES.get(name.strip().lower())


def resolve_dialect(name: DialectLike = None) -> SqlDialect:
    """Resolve a dialect name or alias.

    ``None`` uses the configured default dialect. Unknown names fall back to
    PostgreSQL with a warning; this never raises.
    """
    if name is None or (isinstance(name, str) and not name.strip()):
        name = get_settings().default_dialect
    dialect = lookup_dialect(name)
    if dialect is None:
        logger.warning("No syntax config found for dialect '%s', defaulting to postgresql", name)
        return SqlDialect.POSTGRESQL
    return dialect


def to_sqlglot_dialect(dialect: DialectLike) -> str:
    """Name of the sqlglot dialect for a family or alias."""
    return normalize_sqlglot_dialect(resolve_dialect(dialect).value)
