"""Profile API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_profile_service
from api.schemas.common import ErrorResponse, MessageResponse
from api.schemas.profile import (
    EducationCreate,
    EducationResponse,
    ExperienceCreate,
    ExperienceResponse,
    ProfileOwner,
    ProfileResponse,
    ProfileUpsert,
)
from core.identifiers import parse_id
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import Education, Experience, ProfileWithOwner
from domain.services.profile_service import ProfileService

router = APIRouter(
    prefix="/profile",
    tags=["profile"],
    responses={404: {"model": ErrorResponse, "description": "Resource not found"}},
)


def _build_profile_response(item: ProfileWithOwner) -> ProfileResponse:
    profile, owner = item.profile, item.owner
    return ProfileResponse(
        id=profile.id,
        user=ProfileOwner(id=owner.id, name=owner.name, avatar=owner.avatar),
        status=profile.status,
        skills=profile.skills,
        company=profile.company,
        website=profile.website,
        location=profile.location,
        bio=profile.bio,
        githubusername=profile.github_username,
        experience=[
            ExperienceResponse(
                id=e.id,
                title=e.title,
                company=e.company,
                location=e.location,
                from_date=e.from_date,
                to_date=e.to_date,
                current=e.current,
                description=e.description,
            )
            for e in profile.experience
        ],
        education=[
            EducationResponse(
                id=e.id,
                school=e.school,
                degree=e.degree,
                fieldofstudy=e.field_of_study,
                from_date=e.from_date,
                to_date=e.to_date,
                current=e.current,
                description=e.description,
            )
            for e in profile.education
        ],
        social=profile.social,
        created_at=profile.created_at,
    )


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get the caller's profile",
    responses={404: {"description": "There is no profile for this user"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the authenticated user's profile."""
    return _build_profile_response(await service.get_own(user.id))


@router.post(
    "",
    response_model=ProfileResponse,
    summary="Create or update the caller's profile",
    responses={400: {"description": "Status and skills are required"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Create the caller's profile, or update the existing one."""
    item = await service.create_or_update(
        user_id=user.id,
        status=body.status,
        skills=list(body.skills),
        company=body.company,
        website=body.website,
        location=body.location,
        bio=body.bio,
        github_username=body.githubusername,
        social=body.social.model_dump(exclude_none=True) if body.social else None,
    )
    return _build_profile_response(item)


@router.get(
    "",
    response_model=list[ProfileResponse],
    summary="List all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> list[ProfileResponse]:
    """Get every profile. Public."""
    return [_build_profile_response(item) for item in await service.get_all()]


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    summary="Get a profile by user ID",
    responses={404: {"description": "Profile not found or invalid user id"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get a user's profile. Public."""
    item = await service.get_by_user_id(parse_id(user_id, "user"))
    return _build_profile_response(item)


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete the caller's profile",
    responses={404: {"description": "There is no profile for this user"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the caller's profile. The user account is kept."""
    await service.delete(user.id)
    return MessageResponse(message="Profile deleted")


@router.put(
    "/experience",
    response_model=ProfileResponse,
    summary="Add profile experience",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an experience entry to the caller's profile."""
    experience = Experience(
        title=body.title,
        company=body.company,
        location=body.location,
        from_date=body.from_date,
        to_date=body.to_date,
        current=body.current,
        description=body.description,
    )
    return _build_profile_response(await service.add_experience(user.id, experience))


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileResponse,
    summary="Delete profile experience",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_experience(
    request: Request,
    exp_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an experience entry from the caller's profile."""
    item = await service.delete_experience(user.id, parse_id(exp_id, "experience"))
    return _build_profile_response(item)


@router.put(
    "/education",
    response_model=ProfileResponse,
    summary="Add profile education",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an education entry to the caller's profile."""
    education = Education(
        school=body.school,
        degree=body.degree,
        field_of_study=body.fieldofstudy,
        from_date=body.from_date,
        to_date=body.to_date,
        current=body.current,
        description=body.description,
    )
    return _build_profile_response(await service.add_education(user.id, education))


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileResponse,
    summary="Delete profile education",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_education(
    request: Request,
    edu_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an education entry from the caller's profile."""
    item = await service.delete_education(user.id, parse_id(edu_id, "education"))
    return _build_profile_response(item)
