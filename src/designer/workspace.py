"""Live schema context shared by a hosting application and its views."""

import logging
from enum import Enum
from typing import Callable, List, Optional

from ddl import ParseMode, parse_sql
from schema import Relationship, Schema, TableDef
from sqlgen import DialectLike, generate_schema_sql

logger = logging.getLogger(__name__)


class WorkspaceEvent(str, Enum):
    """Notifications delivered to workspace subscribers."""

    SCHEMA_CHANGED = "schema_changed"
    SCHEMA_RESET = "schema_reset"


Listener = Callable[[WorkspaceEvent, Schema], None]


class SchemaWorkspace:
    """Holds the current Schema and notifies subscribers when it changes.

    Callers create one workspace per editing session and pass it to whatever
    needs the schema; there is no module-level instance.
    """

    def __init__(self, schema: Optional[Schema] = None):
        self._schema = schema if schema is not None else Schema()
        self._listeners: List[Listener] = []

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def table_count(self) -> int:
        return len(self._schema.tables)

    @property
    def relationship_count(self) -> int:
        return len(self._schema.relationships)

    @property
    def field_count(self) -> int:
        return self._schema.field_count()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: WorkspaceEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, self._schema)
            except Exception:
                logger.exception("Workspace listener failed on %s", event.value)

    def load_sql(self, sql: str, dialect: DialectLike = None) -> Schema:
        """Parse ``sql`` and make the result the current schema."""
        schema = parse_sql(
            sql, dialect=str(dialect) if dialect else None, mode=ParseMode.LENIENT
        )
        self._schema = schema
        logger.info(
            "Loaded %d table(s) and %d relationship(s) into workspace",
            len(schema.tables),
            len(schema.relationships),
        )
        self._notify(WorkspaceEvent.SCHEMA_RESET)
        self._notify(WorkspaceEvent.SCHEMA_CHANGED)
        return schema

    def replace_schema(self, schema: Schema) -> None:
        self._schema = schema
        self._notify(WorkspaceEvent.SCHEMA_CHANGED)

    def add_table(self, table: TableDef) -> None:
        """Append ``table``, or replace the existing table with the same name in place.

        The table's outgoing relationships are rebuilt from its fields'
        ``foreign_key`` values.
        """
        for index, existing in enumerate(self._schema.tables):
            if existing.name == table.name:
                self._schema.tables[index] = table
                break
        else:
            self._schema.tables.append(table)

        self._schema.relationships = [
            rel for rel in self._schema.relationships if rel.from_table != table.name
        ]
        for field in table.fields:
            if field.foreign_key is not None:
                self._schema.relationships.append(
                    Relationship(
                        from_table=table.name,
                        from_field=field.name,
                        to_table=field.foreign_key.table,
                        to_field=field.foreign_key.column,
                    )
                )
        self._notify(WorkspaceEvent.SCHEMA_CHANGED)

    def remove_table(self, name: str) -> bool:
        """Remove a table and every relationship touching it.

        Fields in other tables that referenced the removed table lose their
        ``foreign_key``. Returns False when no such table exists.
        """
        table = self._schema.get_table(name)
        if table is None:
            return False

        self._schema.tables.remove(table)
        self._schema.relationships = [
            rel
            for rel in self._schema.relationships
            if rel.from_table != name and rel.to_table != name
        ]
        for _, field in self._schema.iter_fields():
            if field.foreign_key is not None and field.foreign_key.table == name:
                field.foreign_key = None

        logger.debug("Removed table %s from workspace", name)
        self._notify(WorkspaceEvent.SCHEMA_CHANGED)
        return True

    def clear(self) -> None:
        self._schema = Schema()
        self._notify(WorkspaceEvent.SCHEMA_RESET)

    def export_sql(self, dialect: DialectLike = None) -> str:
        """Current schema as SQL; an empty schema exports as an empty string."""
        if not self._schema.tables:
            return ""
        return generate_schema_sql(self._schema, dialect)
