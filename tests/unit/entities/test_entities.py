"""Unit tests for domain entities."""

import hashlib
from datetime import datetime, timedelta
from uuid import uuid4

from domain.entities.post import Comment, Like, Post
from domain.entities.profile import Profile
from domain.entities.user import User, gravatar_url


class TestGravatar:
    def test_uses_normalized_email_digest(self):
        digest = hashlib.md5(b"ada@example.com").hexdigest()

        assert gravatar_url("  Ada@Example.com ") == (
            f"//www.gravatar.com/avatar/{digest}?s=200&r=pg&d=mm"
        )

    def test_user_avatar_defaults_to_gravatar(self):
        user = User(name="Ada", email="ada@example.com", password_hash="x")

        assert user.avatar == gravatar_url("ada@example.com")

    def test_explicit_avatar_is_kept(self):
        user = User(name="Ada", email="ada@example.com", password_hash="x", avatar="pic")

        assert user.avatar == "pic"


class TestPost:
    def _post(self) -> Post:
        return Post(user_id=uuid4(), text="hi", name="A", avatar="")

    def test_like_index(self):
        post = self._post()
        liker = uuid4()
        post.likes = [Like(user_id=uuid4()), Like(user_id=liker)]

        assert post.like_index(liker) == 1
        assert post.like_index(uuid4()) is None

    def test_find_comment(self):
        post = self._post()
        comment = Comment(user_id=uuid4(), text="c", name="B", avatar="")
        post.comments = [comment]

        assert post.find_comment(comment.id) is comment
        assert post.find_comment(uuid4()) is None


class TestProfile:
    def test_updated_at_never_before_created_at(self):
        created = datetime(2024, 1, 2)

        profile = Profile(
            user_id=uuid4(),
            status="Dev",
            created_at=created,
            updated_at=created - timedelta(days=1),
        )

        assert profile.updated_at == created
