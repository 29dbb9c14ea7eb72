"""User registration routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import get_auth_provider
from api.dependencies.services import get_user_service
from api.schemas.user import TokenResponse, UserRegister
from core.rate_limit import WRITE_LIMIT, limiter
from domain.services.user_service import UserService
from infrastructure.auth.provider import IAuthProvider

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=TokenResponse,
    summary="Register a user",
    responses={
        200: {"description": "User registered, token issued"},
        400: {"description": "Validation failed or user already exists"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def register_user(
    request: Request,
    body: UserRegister,
    service: UserService = Depends(get_user_service),
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenResponse:
    """Register a new user and return a bearer token for them."""
    user = await service.register(
        name=body.name,
        email=body.email,
        password=body.password,
    )
    return TokenResponse(token=auth_provider.create_token(user.id))
