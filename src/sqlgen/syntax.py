"""Per-dialect syntax table used by the generator and the AI prompt.

Adding a dialect is a data addition here plus an alias entry in ``dialects``.
"""

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .dialects import DialectLike, SqlDialect, resolve_dialect


class DialectSyntax(BaseModel):
    """Spellings of DDL concepts for one dialect family."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    auto_increment: str
    # Keys: serial, text, integer, boolean, timestamp, decimal
    data_types: Dict[str, str]
    varchar_template: str
    primary_key: str = "PRIMARY KEY"
    not_null: str = "NOT NULL"
    unique: str = "UNIQUE"
    foreign_key_template: str = "REFERENCES {table}({column})"
    now: str
    uuid: str
    prompt_notes: Tuple[str, ...] = ()

    def varchar(self, length: Optional[int] = None) -> str:
        return self.varchar_template.format(length=length or 255)

    def foreign_key(self, table: str, column: str) -> str:
        return self.foreign_key_template.format(table=table, column=column)


DIALECT_SYNTAX: Dict[SqlDialect, DialectSyntax] = {
    SqlDialect.POSTGRESQL: DialectSyntax(
        display_name="POSTGRESQL",
        auto_increment="SERIAL PRIMARY KEY",
        data_types={
            "serial": "SERIAL",
            "text": "TEXT",
            "integer": "INTEGER",
            "boolean": "BOOLEAN",
            "timestamp": "TIMESTAMP",
            "decimal": "DECIMAL",
        },
        varchar_template="VARCHAR({length})",
        now="NOW()",
        uuid="gen_random_uuid()",
        prompt_notes=(
            "Use SERIAL for auto-incrementing primary keys",
            "Advanced types such as JSON and UUID are available",
        ),
    ),
    SqlDialect.MYSQL: DialectSyntax(
        display_name="MYSQL",
        auto_increment="INT AUTO_INCREMENT PRIMARY KEY",
        data_types={
            "serial": "INT AUTO_INCREMENT",
            "text": "TEXT",
            "integer": "INT",
            "boolean": "BOOLEAN",
            "timestamp": "TIMESTAMP",
            "decimal": "DECIMAL",
        },
        varchar_template="VARCHAR({length})",
        now="NOW()",
        uuid="UUID()",
        prompt_notes=(
            "Use AUTO_INCREMENT for auto-incrementing primary keys (NOT SERIAL)",
            "Use backticks for table/column names that conflict with keywords",
        ),
    ),
    SqlDialect.SQLITE: DialectSyntax(
        display_name="SQLITE",
        auto_increment="INTEGER PRIMARY KEY AUTOINCREMENT",
        data_types={
            "serial": "INTEGER PRIMARY KEY AUTOINCREMENT",
            "text": "TEXT",
            "integer": "INTEGER",
            "boolean": "INTEGER",
            "timestamp": "TEXT",
            "decimal": "REAL",
        },
        varchar_template="TEXT",
        now="datetime('now')",
        uuid="lower(hex(randomblob(16)))",
        prompt_notes=(
            "Use TEXT instead of VARCHAR",
            "Use INTEGER for boolean values (0/1)",
            "Store timestamps as TEXT",
            "Foreign keys require PRAGMA foreign_keys=ON",
        ),
    ),
}


def get_syntax(dialect: DialectLike = None) -> DialectSyntax:
    """Syntax table for a dialect family or alias (unknown names use PostgreSQL)."""
    return DIALECT_SYNTAX[resolve_dialect(dialect)]
