"""Authentication provider protocol."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """Represents a user extracted from an auth token."""

    id: UUID
    expires_at: Optional[datetime] = None


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    def verify_token(self, token: str) -> TokenUser:
        """
        Verify an authentication token.

        Args:
            token: The bearer token to verify

        Returns:
            TokenUser for the token's subject

        Raises:
            InvalidTokenError: If the token is malformed or badly signed
            TokenExpiredError: If the token is past its expiry
        """
        ...

    def create_token(self, user_id: UUID) -> str:
        """
        Create an authentication token for a user.

        Args:
            user_id: The user to create a token for

        Returns:
            The generated token string
        """
        ...
