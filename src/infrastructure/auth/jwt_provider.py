"""JWT authentication provider implementation.

Tokens are HS256-signed with the configured secret and carry the user id
in ``sub``:

    {
        "sub": "user-uuid",
        "iat": 1234567000,
        "exp": 1234567890
    }

Verification is stateless. A token stays valid until it expires.
"""

import logging
from datetime import datetime, timedelta
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from core.config import settings
from core.exceptions import InvalidTokenError, TokenExpiredError
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)


class JWTAuthProvider:
    """JWT-based authentication provider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    def verify_token(self, token: str) -> TokenUser:
        """
        Verify a JWT and extract the user it was issued for.

        Args:
            token: The JWT to verify

        Returns:
            TokenUser for the token's subject

        Raises:
            TokenExpiredError: If the token's ``exp`` is in the past
            InvalidTokenError: If the signature, structure or subject is invalid
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredError() from None
        except JWTError as e:
            logger.debug("JWT rejected: %s", e)
            raise InvalidTokenError() from None

        subject = payload.get("sub")
        if not subject:
            raise InvalidTokenError()

        try:
            user_id = UUID(subject)
        except (ValueError, TypeError):
            raise InvalidTokenError() from None

        exp = payload.get("exp")
        expires_at = datetime.utcfromtimestamp(exp) if isinstance(exp, (int, float)) else None

        return TokenUser(id=user_id, expires_at=expires_at)

    def create_token(self, user_id: UUID) -> str:
        """
        Create a signed JWT for a user.

        Args:
            user_id: The user to create a token for

        Returns:
            The generated JWT string
        """
        now = datetime.utcnow()
        payload: dict = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + timedelta(minutes=self._expire_minutes),
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
