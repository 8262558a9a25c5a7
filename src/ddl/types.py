"""Normalization of raw column type tokens into logical types."""

from typing import Dict

from schema.types import LogicalType

# Raw spellings seen across PostgreSQL, MySQL and SQLite DDL.
TYPE_MAP: Dict[str, LogicalType] = {
    "SERIAL": LogicalType.INT8,
    "BIGSERIAL": LogicalType.INT8,
    "SMALLSERIAL": LogicalType.INT8,
    "INTEGER": LogicalType.INT8,
    "INT": LogicalType.INT8,
    "INT2": LogicalType.INT8,
    "INT4": LogicalType.INT8,
    "INT8": LogicalType.INT8,
    "BIGINT": LogicalType.INT8,
    "SMALLINT": LogicalType.INT8,
    "MEDIUMINT": LogicalType.INT8,
    "TINYINT": LogicalType.INT8,
    "VARCHAR": LogicalType.TEXT,
    "CHAR": LogicalType.TEXT,
    "CHARACTER": LogicalType.TEXT,
    "NVARCHAR": LogicalType.TEXT,
    "NCHAR": LogicalType.TEXT,
    "TEXT": LogicalType.TEXT,
    "TINYTEXT": LogicalType.TEXT,
    "MEDIUMTEXT": LogicalType.TEXT,
    "LONGTEXT": LogicalType.TEXT,
    "BOOLEAN": LogicalType.BOOLEAN,
    "BOOL": LogicalType.BOOLEAN,
    "TIMESTAMP": LogicalType.TIMESTAMP,
    "TIMESTAMPTZ": LogicalType.TIMESTAMP,
    "DATETIME": LogicalType.TIMESTAMP,
    "DATE": LogicalType.TIMESTAMP,
    "TIME": LogicalType.TIMESTAMP,
    "TIMETZ": LogicalType.TIMESTAMP,
    "DECIMAL": LogicalType.NUMERIC,
    "NUMERIC": LogicalType.NUMERIC,
    "REAL": LogicalType.NUMERIC,
    "DOUBLE": LogicalType.NUMERIC,
    "FLOAT": LogicalType.NUMERIC,
    "FLOAT4": LogicalType.NUMERIC,
    "FLOAT8": LogicalType.NUMERIC,
    "MONEY": LogicalType.NUMERIC,
    "UUID": LogicalType.UUID,
    "JSON": LogicalType.JSON,
    "JSONB": LogicalType.JSON,
}

AUTO_INCREMENT_TYPES = frozenset({"SERIAL", "BIGSERIAL"})


def base_type(raw: str) -> str:
    """Upper-case a raw type token and drop any ``(length, precision)`` suffix."""
    return (raw or "").split("(", 1)[0].strip().upper()


def is_known_type(raw: str) -> bool:
    return base_type(raw) in TYPE_MAP


def normalize_type(raw: str) -> LogicalType:
    """Map a raw type token to its logical type; unknown tokens become ``text``."""
    return TYPE_MAP.get(base_type(raw), LogicalType.TEXT)
