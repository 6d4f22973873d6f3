from collections.abc import Mapping
from typing import Any

from sqlmodel import Session, select

from blog_api.entities.user.entity import User
from blog_api.entities.user.table import UserTable


class UserRepository:
    """Data-access layer for users.

    Methods flush but never commit; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, data: Mapping[str, Any]) -> User:
        row = UserTable(**data)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return User.from_row(row)

    def get(self, user_id: int) -> User | None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return User.from_row(row)

    def exists(self, user_id: int) -> bool:
        return self._session.get(UserTable, user_id) is not None

    def list_all(self) -> list[User]:
        statement = select(UserTable).order_by(UserTable.id)
        return [User.from_row(row) for row in self._session.exec(statement).all()]

    def update(self, user_id: int, changes: Mapping[str, Any]) -> User | None:
        """Merge ``changes`` into the stored user; absent keys keep their values."""
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None

        for attribute, value in changes.items():
            setattr(row, attribute, value)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return User.from_row(row)

    def delete(self, user_id: int) -> bool:
        """Delete a user together with all of its posts."""
        row = self._session.get(UserTable, user_id)
        if row is None:
            return False

        self._session.delete(row)
        self._session.flush()
        return True
