"""User domain entity."""

from typing import TYPE_CHECKING, Any

from pydantic import Field

from blog_api.entities._base import Entity

if TYPE_CHECKING:
    from blog_api.entities.user.table import UserTable


class User(Entity):
    """User as exposed by the API.

    ``email`` is fixed at creation; updates never touch it.
    """

    first_name: str = Field(description="User's first name")
    last_name: str = Field(description="User's last name")
    email: str = Field(description="User's email address")

    @classmethod
    def from_row(cls, row: "UserTable") -> "User":
        return cls(
            id=row.id,
            first_name=row.first_name,
            last_name=row.last_name,
            email=row.email,
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.first_name == other.first_name
            and self.last_name == other.last_name
            and self.email == other.email
        )

    def __hash__(self) -> int:
        return hash((self.id, self.first_name, self.last_name, self.email))
