"""Post domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Like:
    """A user's like, embedded in a post."""

    user_id: UUID
    id: UUID = field(default_factory=uuid4)


@dataclass
class Comment:
    """A comment embedded in a post, with a snapshot of its author."""

    user_id: UUID
    text: str
    name: str
    avatar: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a Post.

    ``name`` and ``avatar`` are copied from the author at creation time and
    are not kept in sync with later changes.
    """

    user_id: UUID
    text: str
    name: str
    avatar: str
    id: UUID = field(default_factory=uuid4)
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def like_index(self, user_id: UUID) -> int | None:
        """Position of the user's like in the like list, if any."""
        for index, like in enumerate(self.likes):
            if like.user_id == user_id:
                return index
        return None

    def find_comment(self, comment_id: UUID) -> Comment | None:
        """Get a comment by its id."""
        return next((c for c in self.comments if c.id == comment_id), None)
