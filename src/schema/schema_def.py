"""Top-level schema aggregate and its serialization contract."""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .field_def import FieldDef
from .relationship import Relationship
from .table_def import TableDef


class Schema(BaseModel):
    """Ordered tables plus the relationships discovered between them.

    Invariant: every relationship matches exactly one field whose ``foreign_key``
    points at ``to_table(to_field)``, and every field with a ``foreign_key`` has
    exactly one relationship. ``find_inconsistencies`` reports violations.
    """

    tables: List[TableDef] = Field(default_factory=list)
    relationships: List[Relationship] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, frozen=False)

    def get_table(self, name: str) -> Optional[TableDef]:
        """Return the table called ``name`` or None."""
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def iter_fields(self) -> Iterator[Tuple[TableDef, FieldDef]]:
        """Yield ``(table, field)`` pairs in declaration order."""
        for table in self.tables:
            for field in table.fields:
                yield table, field

    def relationship_for(self, table: str, field: str) -> Optional[Relationship]:
        """Return the first relationship leaving ``table.field``."""
        for rel in self.relationships:
            if rel.from_table == table and rel.from_field == field:
                return rel
        return None

    def field_count(self) -> int:
        return sum(len(t.fields) for t in self.tables)

    def find_inconsistencies(self) -> List[str]:
        """List violations of the relationship/foreign-key invariant."""
        problems: List[str] = []
        for rel in self.relationships:
            matches = [
                f
                for t, f in self.iter_fields()
                if t.name == rel.from_table
                and f.name == rel.from_field
                and f.foreign_key is not None
                and f.foreign_key.table == rel.to_table
                and f.foreign_key.column == rel.to_field
            ]
            if len(matches) != 1:
                problems.append(f"relationship {rel} matches {len(matches)} field(s)")

        for table, field in self.iter_fields():
            if field.foreign_key is None:
                continue
            count = sum(
                1
                for rel in self.relationships
                if rel.from_table == table.name
                and rel.from_field == field.name
                and rel.to_table == field.foreign_key.table
                and rel.to_field == field.foreign_key.column
            )
            if count != 1:
                problems.append(
                    f"field {table.name}.{field.name} -> {field.foreign_key} "
                    f"has {count} relationship(s)"
                )
        return problems

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the stable camelCase export contract."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Schema":
        """Load a schema exported by ``to_dict`` (snake_case keys also accepted)."""
        return cls.model_validate(data)
