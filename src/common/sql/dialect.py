"""Shared utilities for SQL dialect handling."""

from typing import Optional

# Host labels (connection providers, UI names) -> sqlglot dialect names.
_SQLGLOT_ALIASES = {
    "postgresql": "postgres",
    "postgres": "postgres",
    "pg": "postgres",
    "postgres-local": "postgres",
    "postgres-like": "postgres",
    "supabase": "postgres",
    "mysql": "mysql",
    "mysql-local": "mysql",
    "mysql-like": "mysql",
    "planetscale": "mysql",
    "mariadb": "mysql",
    "sqlite": "sqlite",
    "sqlite3": "sqlite",
    "sqlite-like": "sqlite",
}


def normalize_sqlglot_dialect(dialect: Optional[str]) -> str:
    """Normalize a dialect name for use with sqlglot.

    Args:
        dialect: The dialect name to normalize (e.g., 'PostgreSQL', 'planetscale').

    Returns:
        A normalized lowercase string compatible with sqlglot. Unknown names are
        returned lowercased so sqlglot can still resolve its own dialects.
    """
    if not dialect:
        return "postgres"

    d = dialect.lower().strip()
    return _SQLGLOT_ALIASES.get(d, d)
