from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from blog_api.entities.post.entity import Post
from blog_api.entities.post.table import PostTable


class PostRepository:
    """Data-access layer for posts.

    Every read eager-loads the owning user. Methods flush but never commit.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, data: Mapping[str, Any]) -> Post:
        row = PostTable(**data)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Post.from_row(row)

    def get(self, post_id: int) -> Post | None:
        row = self._get_row(post_id)
        if row is None:
            return None
        return Post.from_row(row)

    def exists(self, post_id: int) -> bool:
        return self._session.get(PostTable, post_id) is not None

    def list_all(self) -> list[Post]:
        statement = (
            select(PostTable)
            .options(selectinload(PostTable.user))
            .order_by(PostTable.id)
        )
        return [Post.from_row(row) for row in self._session.exec(statement).all()]

    def list_by_user(self, user_id: int) -> list[Post]:
        """Posts owned by ``user_id``; empty when the user has none or does not exist."""
        statement = (
            select(PostTable)
            .where(PostTable.user_id == user_id)
            .options(selectinload(PostTable.user))
            .order_by(PostTable.id)
        )
        return [Post.from_row(row) for row in self._session.exec(statement).all()]

    def update(self, post_id: int, changes: Mapping[str, Any]) -> Post | None:
        """Merge ``changes`` into the stored post; absent keys keep their values."""
        row = self._get_row(post_id)
        if row is None:
            return None

        for attribute, value in changes.items():
            setattr(row, attribute, value)
        self._session.add(row)
        self._session.flush()
        # A reassigned user_id leaves the loaded relationship stale.
        self._session.expire(row, ["user"])
        self._session.refresh(row)
        return Post.from_row(row)

    def delete(self, post_id: int) -> bool:
        row = self._session.get(PostTable, post_id)
        if row is None:
            return False

        self._session.delete(row)
        self._session.flush()
        return True

    def _get_row(self, post_id: int) -> PostTable | None:
        return self._session.get(
            PostTable, post_id, options=[selectinload(PostTable.user)]
        )
