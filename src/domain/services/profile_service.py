"""Profile service layer with business logic."""

from typing import Callable, Optional
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileNotFoundError,
    UserNotFoundError,
)
from core.integrity import is_unique_violation
from domain.entities.profile import (
    SOCIAL_NETWORKS,
    Education,
    Experience,
    Profile,
    ProfileWithOwner,
)
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_own(self, user_id: UUID) -> ProfileWithOwner:
        """Get the caller's profile."""
        return await self.get_by_user_id(user_id)

    async def get_by_user_id(self, user_id: UUID) -> ProfileWithOwner:
        """Get a user's profile."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            return await self._with_owner(uow, profile)

    async def get_all(self) -> list[ProfileWithOwner]:
        """Get all profiles with their owners."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.get_all()
            owners = await uow.users.get_many([p.user_id for p in profiles])
            return [
                ProfileWithOwner(profile=p, owner=owners[p.user_id])
                for p in profiles
                if p.user_id in owners
            ]

    async def create_or_update(
        self,
        user_id: UUID,
        status: str,
        skills: list[str],
        company: Optional[str] = None,
        website: Optional[str] = None,
        location: Optional[str] = None,
        bio: Optional[str] = None,
        github_username: Optional[str] = None,
        social: Optional[dict[str, str]] = None,
    ) -> ProfileWithOwner:
        """Create the caller's profile, or update it if one exists.

        Optional fields left as None keep their stored value on update.
        ``social`` replaces the stored links when given.
        """
        social_links = None
        if social is not None:
            social_links = {k: v for k, v in social.items() if k in SOCIAL_NETWORKS and v}

        fields = {
            "company": company,
            "website": website,
            "location": location,
            "bio": bio,
            "github_username": github_username,
        }

        try:
            return await self._upsert(user_id, status, skills, fields, social_links)
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            # A concurrent request created the profile first; apply ours as an update.
            logger.info("profile_create_conflict", user_id=str(user_id))
            return await self._upsert(user_id, status, skills, fields, social_links)

    async def _upsert(
        self,
        user_id: UUID,
        status: str,
        skills: list[str],
        fields: dict[str, Optional[str]],
        social_links: Optional[dict[str, str]],
    ) -> ProfileWithOwner:
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)

            if profile:
                profile.status = status
                profile.skills = skills
                for name, value in fields.items():
                    if value is not None:
                        setattr(profile, name, value)
                if social_links is not None:
                    profile.social = social_links
                saved = await uow.profiles.update(profile)
                event = "profile_updated"
            else:
                saved = await uow.profiles.create(
                    Profile(
                        user_id=user_id,
                        status=status,
                        skills=skills,
                        social=social_links or {},
                        **fields,
                    )
                )
                event = "profile_created"

            result = await self._with_owner(uow, saved)
            await uow.commit()

        logger.info(event, user_id=str(user_id))
        return result

    async def delete(self, user_id: UUID) -> None:
        """Delete the caller's profile."""
        async with self._uow_factory() as uow:
            deleted = await uow.profiles.delete_by_user(user_id)
            if not deleted:
                raise ProfileNotFoundError(str(user_id))
            await uow.commit()

        logger.info("profile_deleted", user_id=str(user_id))

    async def add_experience(self, user_id: UUID, experience: Experience) -> ProfileWithOwner:
        """Add an experience entry to the front of the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.experience.insert(0, experience)
            saved = await uow.profiles.update(profile)
            result = await self._with_owner(uow, saved)
            await uow.commit()
            return result

    async def delete_experience(self, user_id: UUID, experience_id: UUID) -> ProfileWithOwner:
        """Remove an experience entry by its ID."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            remaining = [e for e in profile.experience if e.id != experience_id]
            if len(remaining) == len(profile.experience):
                raise ExperienceNotFoundError(str(experience_id))
            profile.experience = remaining
            saved = await uow.profiles.update(profile)
            result = await self._with_owner(uow, saved)
            await uow.commit()
            return result

    async def add_education(self, user_id: UUID, education: Education) -> ProfileWithOwner:
        """Add an education entry to the front of the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.education.insert(0, education)
            saved = await uow.profiles.update(profile)
            result = await self._with_owner(uow, saved)
            await uow.commit()
            return result

    async def delete_education(self, user_id: UUID, education_id: UUID) -> ProfileWithOwner:
        """Remove an education entry by its ID."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            remaining = [e for e in profile.education if e.id != education_id]
            if len(remaining) == len(profile.education):
                raise EducationNotFoundError(str(education_id))
            profile.education = remaining
            saved = await uow.profiles.update(profile)
            result = await self._with_owner(uow, saved)
            await uow.commit()
            return result

    async def _require_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_by_user(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id))
        return profile

    async def _with_owner(self, uow: IUnitOfWork, profile: Profile) -> ProfileWithOwner:
        owner = await uow.users.get(profile.user_id)
        if not owner:
            raise UserNotFoundError(str(profile.user_id))
        return ProfileWithOwner(profile=profile, owner=owner)
