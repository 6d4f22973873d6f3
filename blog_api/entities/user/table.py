"""User database table model."""

from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship

from blog_api.entities._base import EntityTable

if TYPE_CHECKING:
    from blog_api.entities.post.table import PostTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    Deleting a user deletes its posts, both through the ORM cascade and the
    ``ON DELETE CASCADE`` foreign key on ``posts.user_id``.
    """

    __tablename__ = "users"

    first_name: str = Field(max_length=255)
    last_name: str = Field(max_length=255)
    email: str = Field(max_length=255)

    posts: list["PostTable"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "PostTable.id",
        },
    )
