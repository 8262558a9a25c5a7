"""Structured schema model: tables, fields and relationships."""

from .field_def import FieldDef, ForeignKeyRef
from .relationship import Relationship
from .schema_def import Schema
from .table_def import TableDef
from .types import LogicalType

__all__ = [
    "FieldDef",
    "ForeignKeyRef",
    "LogicalType",
    "Relationship",
    "Schema",
    "TableDef",
]
