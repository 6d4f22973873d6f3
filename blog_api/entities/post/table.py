"""Post database table model."""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Text
from sqlmodel import Field, Relationship

from blog_api.entities._base import EntityTable

if TYPE_CHECKING:
    from blog_api.entities.user.table import UserTable


class PostTable(EntityTable, table=True):
    """Database persistence model for posts."""

    __tablename__ = "posts"

    title: str = Field(max_length=255)
    description: str = Field(sa_type=Text)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)

    user: Optional["UserTable"] = Relationship(back_populates="posts")
