from pydantic import BaseModel, ConfigDict, Field


class Relationship(BaseModel):
    """Directed foreign-key edge ``from_table.from_field -> to_table.to_field``."""

    from_table: str = Field(..., alias="fromTable")
    from_field: str = Field(..., alias="fromField")
    to_table: str = Field(..., alias="toTable")
    to_field: str = Field(..., alias="toField")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def __str__(self) -> str:
        return f"{self.from_table}.{self.from_field} -> {self.to_table}.{self.to_field}"
