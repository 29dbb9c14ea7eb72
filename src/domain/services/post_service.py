"""Post service layer with business logic.

Every mutation is a read-modify-write of a single post row inside one unit
of work. Concurrent mutations of the same post are not serialized: the last
write wins, so two simultaneous likes can lose one of them.
"""

from typing import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    CommentNotFoundError,
    NotOwnerError,
    PostAlreadyLikedError,
    PostNotFoundError,
    PostNotLikedError,
    UserNotFoundError,
)
from domain.entities.post import Comment, Like, Post
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class PostService:
    """Service layer for Post business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post, snapshotting the author's name and avatar."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            post = Post(
                user_id=user_id,
                text=text,
                name=user.name,
                avatar=user.avatar,
            )

            created = await uow.posts.create(post)
            await uow.commit()

        logger.info("post_created", post_id=str(created.id), user_id=str(user_id))
        return created

    async def get_all(self) -> list[Post]:
        """Get all posts, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()

    async def get_by_id(self, post_id: UUID) -> Post:
        """Get a specific post."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))
            return post

    async def delete(self, post_id: UUID, user_id: UUID) -> None:
        """Delete a post. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))

            if post.user_id != user_id:
                raise NotOwnerError("post")

            await uow.posts.delete(post_id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post_id))

    async def like(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Add the user's like to the front of the like list."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))

            if post.like_index(user_id) is not None:
                raise PostAlreadyLikedError(str(post_id))

            post.likes.insert(0, Like(user_id=user_id))

            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.likes

    async def unlike(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Remove the user's like from the like list."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))

            index = post.like_index(user_id)
            if index is None:
                raise PostNotLikedError(str(post_id))

            del post.likes[index]

            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.likes

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> list[Comment]:
        """Add a comment to the front of the comment list."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))

            post.comments.insert(
                0,
                Comment(
                    user_id=user_id,
                    text=text,
                    name=user.name,
                    avatar=user.avatar,
                ),
            )

            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.comments

    async def delete_comment(
        self, post_id: UUID, comment_id: UUID, user_id: UUID
    ) -> list[Comment]:
        """Delete a comment by its ID. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post:
                raise PostNotFoundError(str(post_id))

            comment = post.find_comment(comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))

            if comment.user_id != user_id:
                raise NotOwnerError("comment")

            post.comments = [c for c in post.comments if c.id != comment_id]

            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.comments
