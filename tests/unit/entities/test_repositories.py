"""Tests for the user and post repositories against a migrated SQLite store."""

import pytest
from sqlalchemy.exc import IntegrityError

from blog_api.entities.post import Post, PostRepository
from blog_api.entities.user import User, UserRepository


@pytest.fixture
def users(session):
    return UserRepository(session)


@pytest.fixture
def posts(session):
    return PostRepository(session)


@pytest.fixture
def ada(users):
    return users.create(
        {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"}
    )


class TestUserRepository:
    """Test user persistence."""

    def test_create_assigns_id(self, ada):
        assert isinstance(ada, User)
        assert ada.id is not None
        assert ada.first_name == "Ada"

    def test_ids_are_unique(self, users, ada):
        other = users.create(
            {"first_name": "Grace", "last_name": "Hopper", "email": "grace@example.com"}
        )
        assert other.id != ada.id

    def test_get(self, users, ada):
        assert users.get(ada.id) == ada
        assert users.get(ada.id + 100) is None

    def test_exists(self, users, ada):
        assert users.exists(ada.id)
        assert not users.exists(ada.id + 100)

    def test_list_all(self, users, ada):
        assert users.list_all() == [ada]

    def test_update_merges_changes(self, users, ada):
        updated = users.update(ada.id, {"last_name": "Byron"})
        assert updated.first_name == "Ada"
        assert updated.last_name == "Byron"
        assert updated.email == ada.email

    def test_update_missing(self, users):
        assert users.update(999, {"first_name": "X"}) is None

    def test_delete(self, users, ada):
        assert users.delete(ada.id) is True
        assert users.get(ada.id) is None
        assert users.delete(ada.id) is False

    def test_duplicate_emails_are_allowed(self, users, ada):
        twin = users.create(
            {"first_name": "Ada", "last_name": "Twin", "email": ada.email}
        )
        assert twin.email == ada.email


class TestPostRepository:
    """Test post persistence and its relation to users."""

    def test_create_embeds_owner(self, posts, ada):
        post = posts.create({"title": "T", "description": "D", "user_id": ada.id})
        assert isinstance(post, Post)
        assert post.user_id == ada.id
        assert post.user == ada

    def test_get(self, posts, ada):
        post = posts.create({"title": "T", "description": "D", "user_id": ada.id})
        assert posts.get(post.id) == post
        assert posts.get(post.id + 100) is None

    def test_list_by_user(self, users, posts, ada):
        grace = users.create(
            {"first_name": "Grace", "last_name": "Hopper", "email": "grace@example.com"}
        )
        mine = posts.create({"title": "A", "description": "a", "user_id": ada.id})
        posts.create({"title": "B", "description": "b", "user_id": grace.id})

        assert posts.list_by_user(ada.id) == [mine]
        assert posts.list_by_user(999) == []
        assert len(posts.list_all()) == 2

    def test_update_reassigns_owner(self, users, posts, ada):
        grace = users.create(
            {"first_name": "Grace", "last_name": "Hopper", "email": "grace@example.com"}
        )
        post = posts.create({"title": "T", "description": "D", "user_id": ada.id})

        moved = posts.update(post.id, {"user_id": grace.id})

        assert moved.user_id == grace.id
        assert moved.user == grace
        assert moved.title == "T"

    def test_update_missing(self, posts):
        assert posts.update(999, {"title": "X"}) is None

    def test_delete(self, posts, ada):
        post = posts.create({"title": "T", "description": "D", "user_id": ada.id})
        assert posts.delete(post.id) is True
        assert not posts.exists(post.id)
        assert posts.delete(post.id) is False

    def test_unknown_owner_violates_foreign_key(self, posts):
        with pytest.raises(IntegrityError):
            posts.create({"title": "T", "description": "D", "user_id": 12345})

    def test_deleting_user_cascades_to_posts(self, users, posts, ada):
        first = posts.create({"title": "A", "description": "a", "user_id": ada.id})
        second = posts.create({"title": "B", "description": "b", "user_id": ada.id})

        users.delete(ada.id)

        assert not posts.exists(first.id)
        assert not posts.exists(second.id)
        assert posts.list_by_user(ada.id) == []
