"""Unit tests for UserService."""

from uuid import UUID

import pytest
from sqlalchemy.exc import IntegrityError

from core.exceptions import DuplicateEmailError, InvalidCredentialsError, UserNotFoundError
from domain.entities.user import User
from domain.services.user_service import UserService
from tests.unit.conftest import FakePasswordHasher, FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> UserService:
    return UserService(lambda: uow, password_hasher=FakePasswordHasher())


# --- register ---


class TestRegister:
    @pytest.mark.asyncio
    async def test_creates_user_with_hashed_password(
        self, service: UserService, uow: FakeUnitOfWork
    ):
        uow.users.get_by_email.return_value = None
        uow.users.create.side_effect = lambda user: user

        result = await service.register("Ada", "ada@example.com", "secret1")

        created: User = uow.users.create.call_args.args[0]
        assert created.password_hash == "hashed:secret1"
        assert created.password_hash != "secret1"
        assert result.name == "Ada"
        assert uow.committed

    @pytest.mark.asyncio
    async def test_derives_gravatar_avatar(self, service: UserService, uow: FakeUnitOfWork):
        uow.users.get_by_email.return_value = None
        uow.users.create.side_effect = lambda user: user

        result = await service.register("Ada", "ada@example.com", "secret1")

        assert result.avatar.startswith("//www.gravatar.com/avatar/")
        assert "s=200" in result.avatar

    @pytest.mark.asyncio
    async def test_raises_on_duplicate_email(
        self, service: UserService, uow: FakeUnitOfWork, user: User
    ):
        uow.users.get_by_email.return_value = user

        with pytest.raises(DuplicateEmailError) as exc_info:
            await service.register("Other", user.email, "secret1")

        assert exc_info.value.status_code == 400
        uow.users.create.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_unique_violation_on_insert_is_duplicate_email(
        self, service: UserService, uow: FakeUnitOfWork
    ):
        # Another registration for the same email won between check and insert
        uow.users.get_by_email.return_value = None
        uow.users.create.side_effect = IntegrityError(
            "INSERT ...", {}, Exception("UNIQUE constraint failed: users.email")
        )

        with pytest.raises(DuplicateEmailError) as exc_info:
            await service.register("Ada", "ada@example.com", "secret1")

        assert exc_info.value.status_code == 400
        assert uow.rolled_back
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_other_integrity_errors_are_reraised(
        self, service: UserService, uow: FakeUnitOfWork
    ):
        uow.users.get_by_email.return_value = None
        uow.users.create.side_effect = IntegrityError(
            "INSERT ...", {}, Exception("NOT NULL constraint failed: users.name")
        )

        with pytest.raises(IntegrityError):
            await service.register("Ada", "ada@example.com", "secret1")


# --- authenticate ---


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_returns_user_for_valid_credentials(
        self, service: UserService, uow: FakeUnitOfWork, user: User
    ):
        uow.users.get_by_email.return_value = user

        result = await service.authenticate(user.email, "secret1")

        assert result.id == user.id

    @pytest.mark.asyncio
    async def test_raises_for_wrong_password(
        self, service: UserService, uow: FakeUnitOfWork, user: User
    ):
        uow.users.get_by_email.return_value = user

        with pytest.raises(InvalidCredentialsError):
            await service.authenticate(user.email, "wrong-password")

    @pytest.mark.asyncio
    async def test_raises_for_unknown_email(self, service: UserService, uow: FakeUnitOfWork):
        uow.users.get_by_email.return_value = None

        with pytest.raises(InvalidCredentialsError):
            await service.authenticate("nobody@example.com", "secret1")


# --- get_by_id ---


class TestGetById:
    @pytest.mark.asyncio
    async def test_returns_user(
        self, service: UserService, uow: FakeUnitOfWork, user: User, user_id: UUID
    ):
        uow.users.get.return_value = user

        result = await service.get_by_id(user_id)

        assert result.email == user.email

    @pytest.mark.asyncio
    async def test_raises_not_found(
        self, service: UserService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.get_by_id(user_id)
