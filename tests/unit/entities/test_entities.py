"""Tests for the API-facing entity models."""

from blog_api.entities.post import Post, PostTable
from blog_api.entities.user import User, UserTable


class TestUser:
    """Test the user entity."""

    def test_serializes_with_camel_case_keys(self):
        user = User(id=1, first_name="Ada", last_name="Lovelace", email="ada@example.com")
        assert user.model_dump(by_alias=True) == {
            "id": 1,
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "ada@example.com",
        }

    def test_accepts_camel_case_keys(self):
        user = User.model_validate(
            {"id": 1, "firstName": "Ada", "lastName": "Lovelace", "email": "a@b.co"}
        )
        assert user.first_name == "Ada"

    def test_equality_and_hash(self):
        a = User(id=1, first_name="Ada", last_name="L", email="a@b.co")
        b = User(id=1, first_name="Ada", last_name="L", email="a@b.co")
        assert a == b
        assert hash(a) == hash(b)
        assert a != User(id=2, first_name="Ada", last_name="L", email="a@b.co")
        assert a != "Ada"

    def test_from_row(self):
        row = UserTable(id=3, first_name="Ada", last_name="L", email="a@b.co")
        assert User.from_row(row) == User(
            id=3, first_name="Ada", last_name="L", email="a@b.co"
        )


class TestPost:
    """Test the post entity."""

    def test_from_row_embeds_user(self):
        owner = UserTable(id=3, first_name="Ada", last_name="L", email="a@b.co")
        row = PostTable(id=7, title="T", description="D", user_id=3)
        row.user = owner

        post = Post.from_row(row)

        assert post.user == User.from_row(owner)
        assert post.model_dump(by_alias=True)["userId"] == 3
        assert post.model_dump(by_alias=True)["user"]["firstName"] == "Ada"

    def test_from_row_without_user(self):
        row = PostTable(id=7, title="T", description="D", user_id=3)
        assert Post.from_row(row).user is None
