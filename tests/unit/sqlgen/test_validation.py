"""Tests for dialect checks on CREATE TABLE scripts."""

from schema import FieldDef, Schema, TableDef
from sqlgen import generate_schema_sql, validate_sql


def _generated(dialect: str) -> str:
    table = TableDef(
        name="users",
        fields=[
            FieldDef(name="id", type="int8", nullable=False, primary_key=True),
            FieldDef(name="email", type="text", nullable=False),
        ],
    )
    return generate_schema_sql(Schema(tables=[table]), dialect)


def test_generated_sql_is_valid_for_each_dialect():
    """Generator output passes the checks for its own dialect."""
    for dialect in ("postgresql", "mysql", "sqlite"):
        result = validate_sql(_generated(dialect), dialect)
        assert result.valid is True, (dialect, result.errors)
        assert result.errors == []


def test_postgres_rejects_mysql_syntax():
    """AUTO_INCREMENT and ENGINE are MySQL-only."""
    result = validate_sql(
        "CREATE TABLE a (id INT AUTO_INCREMENT PRIMARY KEY) ENGINE=InnoDB;", "postgresql"
    )
    assert result.valid is False
    assert result.errors == [
        "Use SERIAL or GENERATED ALWAYS AS IDENTITY instead of AUTO_INCREMENT in PostgreSQL",
        "ENGINE clause is not supported in PostgreSQL",
    ]


def test_mysql_rejects_serial_and_warns_on_boolean():
    """SERIAL is an error in MySQL while BOOLEAN only warns."""
    result = validate_sql("CREATE TABLE a (id SERIAL PRIMARY KEY, flag BOOLEAN);", "mysql")
    assert result.valid is False
    assert result.errors == ["Use AUTO_INCREMENT instead of SERIAL in MySQL"]
    assert (
        "Consider using TINYINT(1) instead of BOOLEAN in MySQL for better compatibility"
        in result.warnings
    )


def test_sqlite_rejects_auto_increment():
    """SQLite spells it AUTOINCREMENT."""
    result = validate_sql("CREATE TABLE a (id INTEGER PRIMARY KEY AUTO_INCREMENT);", "sqlite")
    assert result.errors == ["Use AUTOINCREMENT instead of AUTO_INCREMENT in SQLite"]
    assert validate_sql("CREATE TABLE a (id INTEGER PRIMARY KEY AUTOINCREMENT);", "sqlite").valid


def test_missing_column_list_is_an_error():
    """CREATE TABLE needs a column list."""
    result = validate_sql("CREATE TABLE a;", "postgresql")
    assert result.errors == ["CREATE TABLE statement missing column definitions"]


def test_messages_are_reported_once():
    """A rule broken by several statements is listed once."""
    sql = "CREATE TABLE a (id SERIAL);\nCREATE TABLE b (id SERIAL);"
    assert validate_sql(sql, "mysql").errors == ["Use AUTO_INCREMENT instead of SERIAL in MySQL"]


def test_comments_do_not_trigger_rules():
    """Keywords inside comments are ignored."""
    sql = "-- AUTO_INCREMENT is not used here\nCREATE TABLE a (id SERIAL PRIMARY KEY);"
    assert validate_sql(sql, "postgresql").errors == []


def test_unparseable_sql_is_a_warning():
    """sqlglot failures are reported as warnings, not errors."""
    result = validate_sql("CREATE TABLE a (name TEXT DEFAULT 'oops);", "postgresql")
    assert result.valid is True
    assert any("sqlglot could not parse" in w for w in result.warnings)
