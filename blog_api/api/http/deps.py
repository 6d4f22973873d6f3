"""FastAPI dependencies shared by the routers."""

from collections.abc import Iterator
from typing import Annotated

from fastapi import Path, Request
from sqlmodel import Session

from blog_api.api.http.app_data import ApplicationDependencies
from blog_api.core.validation import MAX_ID, MIN_ID

# Out-of-range ids are rejected before they reach the store.
RecordIdPath = Annotated[int, Path(ge=MIN_ID, le=MAX_ID)]


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield one session per request; roll back if the handler raises."""
    deps = get_app_dependencies(request)
    session = deps.database_service.get_session()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
