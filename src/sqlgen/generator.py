"""Render a Schema as dialect-specific CREATE TABLE statements."""

import logging
from typing import List

from opentelemetry import trace

from schema import FieldDef, Schema, TableDef

from .dialects import DialectLike, SqlDialect, resolve_dialect
from .syntax import DIALECT_SYNTAX
from .types import map_data_type

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

INDENT = "    "
# Field types rendered with the dialect's auto-increment phrase when they are the primary key.
AUTO_INCREMENT_FIELD_TYPES = frozenset({"int8", "integer", "serial"})


def render_column(field: FieldDef, table: TableDef, schema: Schema, dialect: SqlDialect) -> str:
    """One column line (without trailing comma)."""
    syntax = DIALECT_SYNTAX[dialect]
    parts: List[str] = [field.name]

    if field.primary_key and field.type.lower() in AUTO_INCREMENT_FIELD_TYPES:
        parts.append(syntax.auto_increment)
    elif field.primary_key:
        parts.append(f"{map_data_type(field.type, dialect)} {syntax.primary_key}")
    else:
        parts.append(map_data_type(field.type, dialect))

    if not field.nullable and not field.primary_key:
        parts.append(syntax.not_null)

    relationship = schema.relationship_for(table.name, field.name)
    if relationship is not None:
        parts.append(syntax.foreign_key(relationship.to_table, relationship.to_field))

    return INDENT + " ".join(parts)


def generate_table_sql(table: TableDef, schema: Schema, dialect: DialectLike = None) -> str:
    """``CREATE TABLE IF NOT EXISTS`` statement for one table of ``schema``."""
    resolved = resolve_dialect(dialect)
    columns = ",\n".join(render_column(f, table, schema, resolved) for f in table.fields)
    return f"CREATE TABLE IF NOT EXISTS {table.name} (\n{columns}\n);"


def generate_schema_sql(schema: Schema, dialect: DialectLike = None) -> str:
    """All tables of ``schema`` as SQL, in table order, separated by blank lines.

    Tables without fields are skipped since they cannot be created. Returns an
    empty string for an empty schema.
    """
    resolved = resolve_dialect(dialect)
    with tracer.start_as_current_span("sqlgen.generate") as span:
        span.set_attribute("sqlgen.dialect", resolved.value)
        statements: List[str] = []
        for table in schema.tables:
            if not table.fields:
                logger.warning("Skipping table %s: it has no fields", table.name)
                continue
            statements.append(generate_table_sql(table, schema, resolved))
        span.set_attribute("sqlgen.table_count", len(statements))

    logger.debug("Generated %d %s statement(s)", len(statements), resolved.value)
    return "\n\n".join(statements)
