from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import Field, SQLModel


class Entity(BaseModel):
    """Base domain entity with a store-generated integer identifier.

    Serialized with camelCase keys; constructed with snake_case field names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int


class EntityTable(SQLModel, table=False):
    """Base table model with an auto-incrementing integer primary key."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Unique identifier generated by the store",
    )
