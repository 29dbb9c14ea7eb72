"""Unit tests for ProfileService."""

from datetime import date
from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    ProfileNotFoundError,
)
from domain.entities.profile import Education, Experience, Profile
from domain.entities.user import User
from domain.services.profile_service import ProfileService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork, user: User) -> ProfileService:
    uow.users.get.return_value = user
    uow.profiles.create.side_effect = lambda profile: profile
    uow.profiles.update.side_effect = lambda profile: profile
    return ProfileService(lambda: uow)


@pytest.fixture
def profile(user_id: UUID) -> Profile:
    return Profile(
        user_id=user_id,
        status="Developer",
        skills=["python", "sql"],
        company="Analytical Engines",
        social={"twitter": "https://twitter.com/ada"},
    )


def _experience(title: str = "Engineer") -> Experience:
    return Experience(title=title, company="Acme", from_date=date(2020, 1, 1))


def _education(school: str = "University") -> Education:
    return Education(
        school=school,
        degree="BSc",
        field_of_study="Mathematics",
        from_date=date(2015, 9, 1),
        to_date=date(2019, 6, 30),
    )


# --- read ---


class TestGetProfile:
    @pytest.mark.asyncio
    async def test_get_own_bundles_owner(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile, user: User
    ):
        uow.profiles.get_by_user.return_value = profile

        result = await service.get_own(user.id)

        assert result.profile is profile
        assert result.owner.name == user.name

    @pytest.mark.asyncio
    async def test_get_own_without_profile_raises(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get_by_user.return_value = None

        with pytest.raises(ProfileNotFoundError) as exc_info:
            await service.get_own(user_id)

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_get_all_skips_profiles_without_owner(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile, user: User
    ):
        orphan = Profile(user_id=uuid4(), status="Gone", skills=["x"])
        uow.profiles.get_all.return_value = [profile, orphan]
        uow.users.get_many.return_value = {user.id: user}

        result = await service.get_all()

        assert [item.profile for item in result] == [profile]


# --- create_or_update ---


class TestCreateOrUpdate:
    @pytest.mark.asyncio
    async def test_creates_when_missing(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get_by_user.return_value = None

        result = await service.create_or_update(
            user_id=user_id,
            status="Student",
            skills=["go"],
            social={"youtube": "https://youtube.com/ada", "myspace": "nope"},
        )

        uow.profiles.create.assert_called_once()
        uow.profiles.update.assert_not_called()
        assert result.profile.status == "Student"
        assert result.profile.social == {"youtube": "https://youtube.com/ada"}
        assert uow.committed

    @pytest.mark.asyncio
    async def test_updates_existing_and_keeps_omitted_fields(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile, user_id: UUID
    ):
        uow.profiles.get_by_user.return_value = profile

        result = await service.create_or_update(
            user_id=user_id,
            status="Senior Developer",
            skills=["rust"],
            bio="Poet of science",
        )

        uow.profiles.create.assert_not_called()
        assert result.profile.id == profile.id
        assert result.profile.status == "Senior Developer"
        assert result.profile.skills == ["rust"]
        assert result.profile.bio == "Poet of science"
        assert result.profile.company == "Analytical Engines"
        assert result.profile.social == {"twitter": "https://twitter.com/ada"}

    @pytest.mark.asyncio
    async def test_social_replaces_stored_links(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile, user_id: UUID
    ):
        uow.profiles.get_by_user.return_value = profile

        result = await service.create_or_update(
            user_id=user_id,
            status="Developer",
            skills=["python"],
            social={"linkedin": "https://linkedin.com/in/ada"},
        )

        assert result.profile.social == {"linkedin": "https://linkedin.com/in/ada"}

    @pytest.mark.asyncio
    async def test_concurrent_create_is_applied_as_update(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile, user_id: UUID
    ):
        # The first lookup misses, then another request inserts the profile
        uow.profiles.get_by_user.side_effect = [None, profile]
        uow.profiles.create.side_effect = IntegrityError(
            "INSERT ...", {}, Exception("UNIQUE constraint failed: profiles.user_id")
        )

        result = await service.create_or_update(
            user_id=user_id, status="Lead", skills=["go"], bio="Updated"
        )

        uow.profiles.update.assert_called_once()
        assert result.profile.id == profile.id
        assert result.profile.status == "Lead"
        assert result.profile.bio == "Updated"
        assert uow.committed

    @pytest.mark.asyncio
    async def test_other_integrity_errors_are_reraised(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get_by_user.return_value = None
        uow.profiles.create.side_effect = IntegrityError(
            "INSERT ...", {}, Exception("FOREIGN KEY constraint failed")
        )

        with pytest.raises(IntegrityError):
            await service.create_or_update(user_id=user_id, status="Dev", skills=["x"])

        assert uow.profiles.get_by_user.await_count == 1


# --- delete ---


class TestDelete:
    @pytest.mark.asyncio
    async def test_deletes_profile(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.delete_by_user.return_value = True

        await service.delete(user_id)

        uow.profiles.delete_by_user.assert_called_once_with(user_id)
        uow.users.delete.assert_not_called()
        assert uow.committed

    @pytest.mark.asyncio
    async def test_raises_when_no_profile(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.delete_by_user.return_value = False

        with pytest.raises(ProfileNotFoundError):
            await service.delete(user_id)

        assert not uow.committed


# --- experience / education ---


class TestExperience:
    @pytest.mark.asyncio
    async def test_add_prepends(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile, user_id: UUID
    ):
        profile.experience = [_experience("Old job")]
        uow.profiles.get_by_user.return_value = profile

        result = await service.add_experience(user_id, _experience("New job"))

        assert [e.title for e in result.profile.experience] == ["New job", "Old job"]

    @pytest.mark.asyncio
    async def test_add_without_profile_raises(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get_by_user.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.add_experience(user_id, _experience())

    @pytest.mark.asyncio
    async def test_delete_removes_only_target(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile, user_id: UUID
    ):
        keep, drop = _experience("Keep"), _experience("Drop")
        profile.experience = [keep, drop]
        uow.profiles.get_by_user.return_value = profile

        result = await service.delete_experience(user_id, drop.id)

        assert result.profile.experience == [keep]

    @pytest.mark.asyncio
    async def test_delete_unknown_raises(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile, user_id: UUID
    ):
        profile.experience = [_experience()]
        uow.profiles.get_by_user.return_value = profile

        with pytest.raises(ExperienceNotFoundError):
            await service.delete_experience(user_id, uuid4())

        uow.profiles.update.assert_not_called()


class TestEducation:
    @pytest.mark.asyncio
    async def test_add_prepends(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile, user_id: UUID
    ):
        profile.education = [_education("First")]
        uow.profiles.get_by_user.return_value = profile

        result = await service.add_education(user_id, _education("Second"))

        assert [e.school for e in result.profile.education] == ["Second", "First"]

    @pytest.mark.asyncio
    async def test_delete_unknown_raises(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile, user_id: UUID
    ):
        uow.profiles.get_by_user.return_value = profile

        with pytest.raises(EducationNotFoundError):
            await service.delete_education(user_id, uuid4())
