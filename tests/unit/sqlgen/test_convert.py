"""Tests for converting CREATE TABLE scripts between dialects."""

from sqlgen import convert_sql

BLOG_SQL = (
    "CREATE TABLE users (id SERIAL PRIMARY KEY, email TEXT NOT NULL);\n"
    "CREATE TABLE posts (id SERIAL PRIMARY KEY, user_id INTEGER, published BOOLEAN);"
)


def test_postgres_to_sqlite():
    """PostgreSQL input is re-rendered with SQLite spellings."""
    sql = convert_sql(BLOG_SQL, "postgresql", "sqlite")
    assert "    id INTEGER PRIMARY KEY AUTOINCREMENT," in sql
    assert "    user_id INTEGER REFERENCES users(id)," in sql
    assert "    published INTEGER\n" in sql
    assert "SERIAL" not in sql


def test_mysql_to_postgres():
    """MySQL auto-increment columns become SERIAL."""
    mysql = "CREATE TABLE `tags` (`id` INT AUTO_INCREMENT PRIMARY KEY, `label` VARCHAR(20));"
    sql = convert_sql(mysql, "mysql-like", "postgres-like")
    assert sql == (
        "CREATE TABLE IF NOT EXISTS tags (\n"
        "    id SERIAL PRIMARY KEY,\n"
        "    label TEXT\n"
        ");"
    )


def test_same_family_returns_input_unchanged():
    """Aliases of one family do not trigger a conversion."""
    assert convert_sql(BLOG_SQL, "supabase", "postgresql") == BLOG_SQL


def test_conversion_ignores_strict_setting(monkeypatch):
    """Conversion stays best effort when strict parsing is configured."""
    monkeypatch.setenv("SCHEMA_DESIGNER_STRICT_PARSE", "true")
    sql = convert_sql("CREATE TABLE broken;\n" + BLOG_SQL, "postgresql", "mysql")
    assert sql.count("CREATE TABLE IF NOT EXISTS") == 2
