"""User service layer: registration and credential checks."""

from typing import Callable, Protocol
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import DuplicateEmailError, InvalidCredentialsError, UserNotFoundError
from core.integrity import is_unique_violation
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class IPasswordHasher(Protocol):
    """One-way password hashing."""

    def hash(self, password: str) -> str:
        """Hash a plaintext password."""
        ...

    def verify(self, password: str, hashed: str) -> bool:
        """Check a plaintext password against a stored hash."""
        ...


class UserService:
    """Service layer for User business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        password_hasher: IPasswordHasher,
    ) -> None:
        self._uow_factory = uow_factory
        self._hasher = password_hasher

    async def register(self, name: str, email: str, password: str) -> User:
        """Create a user, hashing the password. Emails must be unique."""
        async with self._uow_factory() as uow:
            existing = await uow.users.get_by_email(email)
            if existing:
                raise DuplicateEmailError(email)

            user = User(
                name=name,
                email=email,
                password_hash=self._hasher.hash(password),
            )

            # A concurrent registration can pass the check above; the unique
            # index on email decides.
            try:
                created = await uow.users.create(user)
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                if is_unique_violation(exc):
                    raise DuplicateEmailError(email) from None
                raise

        logger.info("user_registered", user_id=str(created.id))
        return created

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user for a valid email/password pair."""
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)

        # Same error for unknown email and wrong password
        if not user or not self._hasher.verify(password, user.password_hash):
            logger.info("login_failed")
            raise InvalidCredentialsError()

        return user

    async def get_by_id(self, user_id: UUID) -> User:
        """Get a user by ID."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user
