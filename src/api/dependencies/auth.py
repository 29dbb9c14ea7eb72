"""Authentication dependencies for FastAPI."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import IAuthProvider, TokenUser

# auto_error is off so a missing header falls through to x-auth-token
security = HTTPBearer(auto_error=False)


@lru_cache
def get_auth_provider() -> JWTAuthProvider:
    """Token provider configured from settings."""
    return JWTAuthProvider()


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    x_auth_token: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Resolve the caller from their token.

    ``Authorization: Bearer <token>`` is preferred; the legacy
    ``x-auth-token`` header is accepted when it is absent.

    Raises:
        AuthenticationError: No token was sent
        InvalidTokenError: The token is malformed or badly signed
        TokenExpiredError: The token is past its expiry
    """
    token = credentials.credentials if credentials else x_auth_token
    if not token:
        raise AuthenticationError(
            message="No token, authorization denied",
            error_code=ErrorCode.UNAUTHORIZED,
        )
    return auth_provider.verify_token(token)


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
