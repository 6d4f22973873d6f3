"""Post API router with CRUD operations."""

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from blog_api.api.http.deps import RecordIdPath, get_db_session
from blog_api.core.errors import NotFoundError
from blog_api.core.validation import PostBody, PostChanges
from blog_api.entities.post import Post, PostRepository
from blog_api.entities.user import UserRepository

router = APIRouter(prefix="/posts", tags=["posts"])


@contextmanager
def _owner_must_exist(session: Session) -> Iterator[None]:
    """Report a foreign-key rejection as a missing user.

    The owner is checked before writing, but it can be deleted concurrently
    before the write lands; the store's foreign key then rejects the row.
    """
    try:
        yield
    except IntegrityError:
        session.rollback()
        raise NotFoundError.for_entity("User") from None


@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostBody,
    session: Session = Depends(get_db_session),
) -> Post:
    """Create a post owned by an existing user."""
    if body.user_id is None or not UserRepository(session).exists(body.user_id):
        raise NotFoundError.for_entity("User")

    with _owner_must_exist(session):
        post = PostRepository(session).create(body.model_dump())
        session.commit()
    return post


@router.get("", response_model=list[Post])
def list_posts(session: Session = Depends(get_db_session)) -> list[Post]:
    """List all posts with their owners."""
    return PostRepository(session).list_all()


@router.get("/user/{user_id}", response_model=list[Post])
def list_posts_by_user(
    user_id: RecordIdPath, session: Session = Depends(get_db_session)
) -> list[Post]:
    """List the posts of one user; empty for unknown users."""
    return PostRepository(session).list_by_user(user_id)


@router.get("/{post_id}", response_model=Post)
def get_post(post_id: RecordIdPath, session: Session = Depends(get_db_session)) -> Post:
    """Get a post by ID."""
    post = PostRepository(session).get(post_id)
    if post is None:
        raise NotFoundError.for_entity("Post")
    return post


@router.put("/{post_id}", response_model=Post)
def update_post(
    post_id: RecordIdPath,
    body: PostChanges,
    session: Session = Depends(get_db_session),
) -> Post:
    """Update a post; a non-null ``userId`` moves it to another existing user."""
    repository = PostRepository(session)
    if not repository.exists(post_id):
        raise NotFoundError.for_entity("Post")

    changes = body.model_dump(exclude_unset=True)
    # Absent or null userId keeps the current owner.
    if changes.get("user_id") is None:
        changes.pop("user_id", None)
    elif not UserRepository(session).exists(changes["user_id"]):
        raise NotFoundError.for_entity("User")

    with _owner_must_exist(session):
        post = repository.update(post_id, changes)
        session.commit()
    return post


@router.delete("/{post_id}")
def delete_post(
    post_id: RecordIdPath, session: Session = Depends(get_db_session)
) -> dict[str, str]:
    """Delete a post."""
    if not PostRepository(session).delete(post_id):
        raise NotFoundError.for_entity("Post")
    session.commit()
    return {"message": "Post deleted successfully!"}
