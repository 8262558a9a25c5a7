from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ForeignKeyRef(BaseModel):
    """Target of a foreign key: ``table(column)``."""

    table: str
    column: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.table}({self.column})"


class FieldDef(BaseModel):
    """Canonical representation of one table column.

    ``type`` normally holds a logical type name (``int8``, ``text``, ...). Free-form
    tokens are tolerated so hand-edited schemas still render through the generator.
    """

    name: str
    type: str = "text"
    nullable: bool = True
    primary_key: bool = Field(False, alias="primaryKey")
    foreign_key: Optional[ForeignKeyRef] = Field(None, alias="foreignKey")
    default_value: Optional[str] = Field(None, alias="defaultValue")

    model_config = ConfigDict(populate_by_name=True, frozen=False)
