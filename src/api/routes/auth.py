"""Authentication routes: login and current user."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser, get_auth_provider
from api.dependencies.services import get_user_service
from api.schemas.user import TokenResponse, UserLogin, UserResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.user_service import UserService
from infrastructure.auth.provider import IAuthProvider

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "",
    response_model=UserResponse,
    summary="Get the authenticated user",
    responses={
        401: {"description": "Missing or invalid token"},
        404: {"description": "User no longer exists"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Return the user the token was issued for, without the password."""
    account = await service.get_by_id(user.id)
    return UserResponse(
        id=account.id,
        name=account.name,
        email=account.email,
        avatar=account.avatar,
        date=account.created_at,
    )


@router.post(
    "",
    response_model=TokenResponse,
    summary="Log in",
    responses={
        400: {"description": "Validation failed or invalid credentials"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: UserLogin,
    service: UserService = Depends(get_user_service),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenResponse:
    """Exchange email and password for a bearer token."""
    user = await service.authenticate(body.email, body.password)
    return TokenResponse(token=auth_provider.create_token(user.id))
