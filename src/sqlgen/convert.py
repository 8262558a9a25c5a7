"""Translate CREATE TABLE scripts between dialect families."""

import logging

from ddl import ParseMode, parse_sql

from .dialects import DialectLike, resolve_dialect
from .generator import generate_schema_sql

logger = logging.getLogger(__name__)


def convert_sql(sql: str, from_dialect: DialectLike, to_dialect: DialectLike) -> str:
    """Re-render ``sql`` for ``to_dialect``.

    The script is parsed (so implicit ``*_id`` relationships are inferred) and
    regenerated; same-family conversions return the input unchanged.
    """
    source = resolve_dialect(from_dialect)
    target = resolve_dialect(to_dialect)
    if source is target:
        return sql

    schema = parse_sql(sql, dialect=source.value, mode=ParseMode.LENIENT)
    logger.info(
        "Converting %d table(s) from %s to %s", len(schema.tables), source.value, target.value
    )
    return generate_schema_sql(schema, target)
