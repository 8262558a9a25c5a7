"""AI system prompts derived from the dialect syntax table."""

from schema import FieldDef, ForeignKeyRef, Relationship, Schema, TableDef

from .dialects import DialectLike, resolve_dialect
from .generator import generate_schema_sql
from .syntax import DIALECT_SYNTAX

BASE_RULES = (
    "Include appropriate data types",
    "Add PRIMARY KEY constraints where appropriate",
    "Include FOREIGN KEY relationships when tables are related",
    "Use meaningful column names",
    "Add NOT NULL constraints where appropriate",
    "Only return the SQL statements, no explanations",
    "Separate multiple tables with semicolons",
    "Use proper indentation and formatting",
)

PROMPT_TYPE_KEYS = ("integer", "text", "boolean", "timestamp", "decimal")


def example_schema() -> Schema:
    """Two-table schema rendered as the prompt's example output."""
    users = TableDef(
        name="users",
        fields=[
            FieldDef(name="id", type="int8", nullable=False, primary_key=True),
            FieldDef(name="email", type="text", nullable=False),
            FieldDef(name="name", type="text", nullable=False),
            FieldDef(name="created_at", type="timestamp"),
        ],
    )
    posts = TableDef(
        name="posts",
        fields=[
            FieldDef(name="id", type="int8", nullable=False, primary_key=True),
            FieldDef(
                name="user_id",
                type="int8",
                foreign_key=ForeignKeyRef(table="users", column="id"),
            ),
            FieldDef(name="title", type="text", nullable=False),
            FieldDef(name="content", type="text"),
            FieldDef(name="published", type="boolean"),
        ],
    )
    return Schema(
        tables=[users, posts],
        relationships=[
            Relationship(from_table="posts", from_field="user_id", to_table="users", to_field="id")
        ],
    )


def generate_system_prompt(dialect: DialectLike = None) -> str:
    """System prompt telling a model which dialect-specific DDL to emit."""
    resolved = resolve_dialect(dialect)
    syntax = DIALECT_SYNTAX[resolved]

    rules = [f"Use {syntax.display_name} syntax specifically", *BASE_RULES]
    numbered = "\n".join(f"{i}. {rule}" for i, rule in enumerate(rules, start=1))

    types = syntax.data_types
    specific = [
        f"Use {syntax.auto_increment} for auto-incrementing primary keys",
        "Data types: "
        + ", ".join(
            dict.fromkeys(types[key] for key in PROMPT_TYPE_KEYS)
        ),
        f"Current time default: DEFAULT {syntax.now}",
        f"UUID default: DEFAULT {syntax.uuid}",
        f"Foreign keys: column_name {types['integer']} {syntax.foreign_key('table', 'id')}",
        *syntax.prompt_notes,
    ]
    specific_text = "\n".join(f"- {line}" for line in specific)

    return (
        "You are a SQL database schema expert. Generate clean, production-ready SQL "
        "CREATE TABLE statements based on user requirements.\n\n"
        f"Rules:\n{numbered}\n\n"
        f"{syntax.display_name} Specific Rules:\n{specific_text}\n\n"
        f"Example output:\n{generate_schema_sql(example_schema(), resolved)}"
    )
