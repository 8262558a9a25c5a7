"""Tests for the live schema workspace and its change notifications."""

import logging

from designer import SchemaWorkspace, WorkspaceEvent
from schema import FieldDef, ForeignKeyRef, TableDef

BLOG_SQL = """
CREATE TABLE users (id SERIAL PRIMARY KEY, email TEXT NOT NULL);
CREATE TABLE posts (id SERIAL PRIMARY KEY, user_id INTEGER, title TEXT);
CREATE TABLE comments (id SERIAL PRIMARY KEY, post_id INTEGER, user_id INTEGER);
"""


def _recorder(workspace):
    events = []
    unsubscribe = workspace.subscribe(lambda event, schema: events.append(event))
    return events, unsubscribe


class TestLoading:
    """Loading SQL into the workspace."""

    def test_load_sql_replaces_schema_and_notifies(self):
        """load_sql parses, swaps the schema and emits RESET then CHANGED."""
        workspace = SchemaWorkspace()
        events, _ = _recorder(workspace)

        schema = workspace.load_sql(BLOG_SQL)

        assert workspace.schema is schema
        assert workspace.table_count == 3
        assert workspace.relationship_count == 3
        assert workspace.field_count == 8
        assert events == [WorkspaceEvent.SCHEMA_RESET, WorkspaceEvent.SCHEMA_CHANGED]

    def test_export_sql(self):
        """The current schema exports for any dialect; empty exports as empty string."""
        workspace = SchemaWorkspace()
        assert workspace.export_sql() == ""
        workspace.load_sql(BLOG_SQL)
        sql = workspace.export_sql("mysql-like")
        assert sql.count("CREATE TABLE IF NOT EXISTS") == 3
        assert "    post_id INT REFERENCES posts(id)," in sql


class TestMutations:
    """Adding, removing and clearing tables."""

    def test_add_table_appends_or_replaces_in_place(self):
        """A new name appends; an existing name is replaced at its position."""
        workspace = SchemaWorkspace()
        workspace.load_sql(BLOG_SQL)
        events, _ = _recorder(workspace)

        workspace.add_table(TableDef(name="tags", fields=[FieldDef(name="label")]))
        workspace.add_table(
            TableDef(name="posts", fields=[FieldDef(name="id", type="uuid", primary_key=True)])
        )

        assert [t.name for t in workspace.schema.tables] == ["users", "posts", "comments", "tags"]
        assert workspace.schema.get_table("posts").fields[0].type == "uuid"
        assert events == [WorkspaceEvent.SCHEMA_CHANGED, WorkspaceEvent.SCHEMA_CHANGED]

    def test_add_table_keeps_relationships_in_step_with_foreign_keys(self):
        """Added tables contribute their foreign keys; replaced tables drop stale ones."""
        workspace = SchemaWorkspace()
        workspace.load_sql(BLOG_SQL)

        workspace.add_table(
            TableDef(
                name="likes",
                fields=[
                    FieldDef(name="id", type="int8", primary_key=True, nullable=False),
                    FieldDef(
                        name="post_id",
                        type="int8",
                        foreign_key=ForeignKeyRef(table="posts", column="id"),
                    ),
                ],
            )
        )
        workspace.add_table(
            TableDef(name="posts", fields=[FieldDef(name="id", type="int8", primary_key=True)])
        )

        schema = workspace.schema
        assert schema.find_inconsistencies() == []
        assert sorted(str(r) for r in schema.relationships) == [
            "comments.post_id -> posts.id",
            "comments.user_id -> users.id",
            "likes.post_id -> posts.id",
        ]
        assert "REFERENCES posts(id)" in workspace.export_sql().split("likes")[1]

    def test_load_sql_ignores_strict_setting(self, monkeypatch):
        """Loading never raises, even when strict parsing is configured."""
        monkeypatch.setenv("SCHEMA_DESIGNER_STRICT_PARSE", "true")
        workspace = SchemaWorkspace()
        workspace.load_sql("CREATE TABLE broken; " + BLOG_SQL)
        assert workspace.table_count == 3

    def test_remove_table_drops_relationships_both_ways(self):
        """Relationships from and to the table go, and dangling foreign keys are cleared."""
        workspace = SchemaWorkspace()
        workspace.load_sql(BLOG_SQL)

        assert workspace.remove_table("posts") is True

        schema = workspace.schema
        assert [t.name for t in schema.tables] == ["users", "comments"]
        assert [str(r) for r in schema.relationships] == ["comments.user_id -> users.id"]
        assert schema.get_table("comments").get_field("post_id").foreign_key is None
        assert schema.find_inconsistencies() == []

    def test_remove_unknown_table(self):
        """Removing a missing table is a no-op without notification."""
        workspace = SchemaWorkspace()
        events, _ = _recorder(workspace)
        assert workspace.remove_table("ghost") is False
        assert events == []

    def test_clear(self):
        """clear empties the workspace and emits RESET."""
        workspace = SchemaWorkspace()
        workspace.load_sql(BLOG_SQL)
        events, _ = _recorder(workspace)
        workspace.clear()
        assert workspace.table_count == 0
        assert events == [WorkspaceEvent.SCHEMA_RESET]


class TestSubscribers:
    """Observer channel behaviour."""

    def test_unsubscribe_stops_notifications(self):
        """After unsubscribing a listener receives nothing."""
        workspace = SchemaWorkspace()
        events, unsubscribe = _recorder(workspace)
        workspace.clear()
        unsubscribe()
        unsubscribe()
        workspace.clear()
        assert events == [WorkspaceEvent.SCHEMA_RESET]

    def test_listener_receives_current_schema(self):
        """Listeners get the schema as it is after the change."""
        workspace = SchemaWorkspace()
        seen = []
        workspace.subscribe(lambda event, schema: seen.append(len(schema.tables)))
        workspace.load_sql(BLOG_SQL)
        assert seen == [3, 3]

    def test_failing_listener_does_not_break_mutation(self, caplog):
        """A raising listener is logged and other listeners still run."""
        workspace = SchemaWorkspace()

        def broken(event, schema):
            raise RuntimeError("boom")

        workspace.subscribe(broken)
        events, _ = _recorder(workspace)

        with caplog.at_level(logging.ERROR, logger="designer.workspace"):
            workspace.add_table(TableDef(name="t", fields=[FieldDef(name="a")]))

        assert workspace.table_count == 1
        assert events == [WorkspaceEvent.SCHEMA_CHANGED]
        assert "Workspace listener failed" in caplog.text
