from collections.abc import Callable, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from blog_api.api.http.app import create_app
from blog_api.core.services import DbSessionService, MigrationRunner

__all__ = [
    "engine",
    "database_service",
    "session",
    "app",
    "client",
    "user_payload",
    "make_user",
    "make_post",
]


@pytest.fixture
def engine() -> Iterator[Engine]:
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def database_service(engine: Engine) -> DbSessionService:
    """Database service over the test engine with the schema migrated to head."""
    service = DbSessionService(engine=engine)
    MigrationRunner(engine).upgrade()
    return service


@pytest.fixture
def session(database_service: DbSessionService) -> Iterator[Session]:
    with database_service.get_session() as session:
        try:
            yield session
        finally:
            session.rollback()


@pytest.fixture
def app(database_service: DbSessionService) -> FastAPI:
    return create_app(database_service=database_service)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    # Context manager form runs the startup/shutdown lifespan
    with TestClient(app) as client:
        yield client


@pytest.fixture
def user_payload() -> dict[str, Any]:
    return {"firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com"}


@pytest.fixture
def make_user(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Create a user through the API and return the response body."""
    counter = iter(range(1, 10_000))

    def _make_user(**overrides: Any) -> dict[str, Any]:
        n = next(counter)
        payload = {
            "firstName": f"First{n}",
            "lastName": f"Last{n}",
            "email": f"user{n}@example.com",
            **overrides,
        }
        response = client.post("/users", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_user


@pytest.fixture
def make_post(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Create a post through the API and return the response body."""

    def _make_post(user_id: int, **overrides: Any) -> dict[str, Any]:
        payload = {
            "title": "A title",
            "description": "A description",
            "userId": user_id,
            **overrides,
        }
        response = client.post("/posts", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_post
