"""Generic type token -> dialect type spelling."""

import re
from typing import Dict, Optional

from .dialects import DialectLike
from .syntax import get_syntax

_VARCHAR_RE = re.compile(r"varchar\s*\(\s*(\d+)\s*\)")

# Generic/logical type names -> DialectSyntax.data_types key.
GENERIC_TYPE_KEYS: Dict[str, str] = {
    "text": "text",
    "string": "text",
    "int": "integer",
    "int8": "integer",
    "integer": "integer",
    "bool": "boolean",
    "boolean": "boolean",
    "timestamp": "timestamp",
    "datetime": "timestamp",
    "decimal": "decimal",
    "numeric": "decimal",
}


def map_data_type(
    generic_type: str, dialect: DialectLike = None, length: Optional[int] = None
) -> str:
    """Spell ``generic_type`` for ``dialect``.

    ``serial`` and ``varchar(n)`` are special-cased; other known names go through
    the dialect table and anything else is returned upper-cased as written.
    """
    syntax = get_syntax(dialect)
    lower = (generic_type or "").strip().lower()

    if lower == "serial":
        return syntax.data_types["serial"]

    if lower.startswith("varchar"):
        match = _VARCHAR_RE.match(lower)
        return syntax.varchar(int(match.group(1)) if match else length)

    key = GENERIC_TYPE_KEYS.get(lower)
    if key is not None:
        return syntax.data_types[key]

    return (generic_type or "").strip().upper()
