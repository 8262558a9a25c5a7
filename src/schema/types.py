"""Logical column types shared by the parser and generator."""

from enum import Enum


class LogicalType(str, Enum):
    """Dialect-independent column types stored in a Schema."""

    INT8 = "int8"
    TEXT = "text"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    NUMERIC = "numeric"
    UUID = "uuid"
    JSON = "json"

    def __str__(self) -> str:
        return self.value
