"""Hosting-application seam: live workspace, migration planning and the CLI."""

from .migrations import Migration, diff_schemas, plan_migration, sql_checksum
from .workspace import SchemaWorkspace, WorkspaceEvent

__all__ = [
    "Migration",
    "SchemaWorkspace",
    "WorkspaceEvent",
    "diff_schemas",
    "plan_migration",
    "sql_checksum",
]
