"""Post domain entity."""

from typing import TYPE_CHECKING

from pydantic import Field

from blog_api.entities._base import Entity
from blog_api.entities.user.entity import User

if TYPE_CHECKING:
    from blog_api.entities.post.table import PostTable


class Post(Entity):
    """Post as exposed by the API, with its owning user embedded."""

    title: str = Field(description="Post title")
    description: str = Field(description="Post body")
    user_id: int = Field(description="Identifier of the owning user")
    user: User | None = Field(default=None, description="Owning user")

    @classmethod
    def from_row(cls, row: "PostTable") -> "Post":
        return cls(
            id=row.id,
            title=row.title,
            description=row.description,
            user_id=row.user_id,
            user=User.from_row(row.user) if row.user is not None else None,
        )
