"""Tests for generic type -> dialect spelling."""

import pytest

from sqlgen import map_data_type


@pytest.mark.parametrize(
    "generic, dialect, expected",
    [
        ("int8", "sqlite-like", "INTEGER"),
        ("boolean", "mysql-like", "BOOLEAN"),
        ("timestamp", "sqlite-like", "TEXT"),
        ("int8", "mysql-like", "INT"),
        ("int8", "postgres-like", "INTEGER"),
        ("boolean", "sqlite-like", "INTEGER"),
        ("numeric", "sqlite-like", "REAL"),
        ("numeric", "postgres-like", "DECIMAL"),
        ("text", "mysql-like", "TEXT"),
        ("serial", "postgres-like", "SERIAL"),
        ("serial", "mysql-like", "INT AUTO_INCREMENT"),
        ("serial", "sqlite-like", "INTEGER PRIMARY KEY AUTOINCREMENT"),
    ],
)
def test_known_types(generic, dialect, expected):
    """Known generic names go through the dialect table."""
    assert map_data_type(generic, dialect) == expected


def test_varchar_keeps_length():
    """varchar(n) carries its length where the dialect supports it."""
    assert map_data_type("varchar(40)", "postgresql") == "VARCHAR(40)"
    assert map_data_type("VARCHAR ( 12 )", "mysql") == "VARCHAR(12)"
    assert map_data_type("varchar", "mysql", length=80) == "VARCHAR(80)"
    assert map_data_type("varchar(40)", "sqlite") == "TEXT"


def test_unknown_types_pass_through_upper_cased():
    """Unknown tokens are returned upper-cased as written."""
    assert map_data_type("uuid", "postgresql") == "UUID"
    assert map_data_type("jsonb", "postgresql") == "JSONB"
    assert map_data_type("geometry(point, 4326)", "postgresql") == "GEOMETRY(POINT, 4326)"


def test_case_insensitive_lookup():
    """Lookup ignores case."""
    assert map_data_type("BOOLEAN", "sqlite") == "INTEGER"
