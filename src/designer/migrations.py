"""Plan schema migrations between two versions of a CREATE TABLE script.

Plans are computed offline: both scripts are parsed and diffed table by table.
Added tables are created, removed tables dropped, and columns added or dropped
with ``ALTER TABLE``. Changed column definitions are not diffed.
"""

import hashlib
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ddl import ParseMode, parse_sql
from schema import Schema
from sqlgen import DialectLike, generate_table_sql, render_column, resolve_dialect

logger = logging.getLogger(__name__)


def sql_checksum(sql: str) -> str:
    """SHA256 hex digest of a SQL script."""
    return hashlib.sha256(sql.encode("utf-8")).hexdigest()


class Migration(BaseModel):
    """A forward script plus the script that undoes it."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    sql: str
    checksum: str
    created_at: datetime = Field(alias="createdAt")
    rollback_sql: Optional[str] = Field(default=None, alias="rollbackSql")


def diff_schemas(previous: Schema, current: Schema, dialect: DialectLike = None) -> List[str]:
    """Statements that turn ``previous`` into ``current``."""
    resolved = resolve_dialect(dialect)
    statements: List[str] = []

    for table in current.tables:
        old = previous.get_table(table.name)
        if old is None:
            if table.fields:
                statements.append(generate_table_sql(table, current, resolved))
            continue
        for field in table.fields:
            if old.get_field(field.name) is None:
                column = render_column(field, table, current, resolved).strip()
                statements.append(f"ALTER TABLE {table.name} ADD COLUMN {column};")
        for field in old.fields:
            if table.get_field(field.name) is None:
                statements.append(f"ALTER TABLE {table.name} DROP COLUMN {field.name};")

    for table in reversed(previous.tables):
        if current.get_table(table.name) is None:
            statements.append(f"DROP TABLE IF EXISTS {table.name};")

    return statements


def plan_migration(
    previous_sql: str,
    current_sql: str,
    name: Optional[str] = None,
    dialect: DialectLike = None,
) -> Optional[Migration]:
    """Build the migration from ``previous_sql`` to ``current_sql``.

    Returns None when the scripts are identical or describe the same tables and
    columns.
    """
    if (previous_sql or "").strip() == (current_sql or "").strip():
        return None

    resolved = resolve_dialect(dialect)
    previous = parse_sql(previous_sql or "", dialect=resolved.value, mode=ParseMode.LENIENT)
    current = parse_sql(current_sql or "", dialect=resolved.value, mode=ParseMode.LENIENT)

    forward = diff_schemas(previous, current, resolved)
    if not forward:
        logger.info("No structural changes between schema versions")
        return None
    rollback = diff_schemas(current, previous, resolved)

    created_at = datetime.now(timezone.utc)
    sql = "\n".join(forward)
    migration = Migration(
        id=f"migration_{uuid.uuid4().hex[:12]}",
        name=name or f"Schema_Update_{created_at.date().isoformat()}",
        sql=sql,
        checksum=sql_checksum(sql),
        created_at=created_at,
        rollback_sql="\n".join(rollback) or None,
    )
    logger.info("Planned migration %s with %d statement(s)", migration.name, len(forward))
    return migration
