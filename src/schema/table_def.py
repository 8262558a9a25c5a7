from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .field_def import FieldDef


class TableDef(BaseModel):
    """Canonical representation of a table: a name and its ordered fields."""

    name: str
    fields: List[FieldDef] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, frozen=False)

    def get_field(self, name: str) -> Optional[FieldDef]:
        """Return the field called ``name`` or None."""
        for field in self.fields:
            if field.name == name:
                return field
        return None

    def primary_key_field(self) -> Optional[FieldDef]:
        """Return the first primary-key field in declaration order."""
        return next((f for f in self.fields if f.primary_key), None)
