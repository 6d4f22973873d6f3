"""User API router with CRUD operations."""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from blog_api.api.http.deps import RecordIdPath, get_db_session
from blog_api.core.errors import NotFoundError
from blog_api.core.validation import UserBody, UserChanges
from blog_api.entities.user import User, UserRepository

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserBody,
    session: Session = Depends(get_db_session),
) -> User:
    """Create a new user."""
    user = UserRepository(session).create(body.model_dump())
    session.commit()
    return user


@router.get("", response_model=list[User])
def list_users(session: Session = Depends(get_db_session)) -> list[User]:
    """List all users."""
    return UserRepository(session).list_all()


@router.get("/{user_id}", response_model=User)
def get_user(user_id: RecordIdPath, session: Session = Depends(get_db_session)) -> User:
    """Get a user by ID."""
    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError.for_entity("User")
    return user


@router.put("/{user_id}", response_model=User)
def update_user(
    user_id: RecordIdPath,
    body: UserChanges,
    session: Session = Depends(get_db_session),
) -> User:
    """Update a user's names. The email address cannot be changed."""
    user = UserRepository(session).update(user_id, body.model_dump(exclude_unset=True))
    if user is None:
        raise NotFoundError.for_entity("User")
    session.commit()
    return user


@router.delete("/{user_id}")
def delete_user(
    user_id: RecordIdPath, session: Session = Depends(get_db_session)
) -> dict[str, str]:
    """Delete a user and all of its posts."""
    if not UserRepository(session).delete(user_id):
        raise NotFoundError.for_entity("User")
    session.commit()
    return {"message": "User deleted successfully!"}
