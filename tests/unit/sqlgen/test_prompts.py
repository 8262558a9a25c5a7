"""Tests for the AI system prompt built from the syntax table."""

from sqlgen import generate_system_prompt


def test_prompt_names_dialect_and_auto_increment():
    """The prompt carries the dialect's own phrases."""
    prompt = generate_system_prompt("mysql-like")
    assert "Use MYSQL syntax specifically" in prompt
    assert "MYSQL Specific Rules:" in prompt
    assert "Use INT AUTO_INCREMENT PRIMARY KEY for auto-incrementing primary keys" in prompt
    assert "UUID default: DEFAULT UUID()" in prompt


def test_prompt_example_is_rendered_by_the_generator():
    """The example output matches the generator for the same dialect."""
    prompt = generate_system_prompt("sqlite-like")
    assert "Example output:\nCREATE TABLE IF NOT EXISTS users (\n" in prompt
    assert "    id INTEGER PRIMARY KEY AUTOINCREMENT," in prompt
    assert "    user_id INTEGER REFERENCES users(id)," in prompt
    assert "Current time default: DEFAULT datetime('now')" in prompt
    assert "Data types: INTEGER, TEXT, REAL" in prompt


def test_prompt_lists_numbered_rules():
    """General rules are numbered after the dialect rule."""
    prompt = generate_system_prompt("postgresql")
    assert "1. Use POSTGRESQL syntax specifically" in prompt
    assert "2. Include appropriate data types" in prompt
    assert "Data types: INTEGER, TEXT, BOOLEAN, TIMESTAMP, DECIMAL" in prompt


def test_unknown_dialect_prompt_is_postgres():
    """Unknown dialects produce the PostgreSQL prompt."""
    assert generate_system_prompt("oracle") == generate_system_prompt("postgresql")
