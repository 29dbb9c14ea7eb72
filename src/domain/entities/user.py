"""User domain entity."""

import hashlib
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

GRAVATAR_BASE_URL = "//www.gravatar.com/avatar"


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """Build the Gravatar URL for an email address."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"{GRAVATAR_BASE_URL}/{digest}?s={size}&r={rating}&d={default}"


@dataclass
class User:
    """Domain entity for a registered user.

    ``password_hash`` is a bcrypt hash and must never leave the service layer.
    """

    name: str
    email: str
    password_hash: str
    id: UUID = field(default_factory=uuid4)
    avatar: str = ""
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Derive the avatar from the email when none was given."""
        if not self.avatar:
            self.avatar = gravatar_url(self.email)
