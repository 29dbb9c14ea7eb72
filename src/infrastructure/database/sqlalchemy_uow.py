"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_post_repo import SQLAlchemyPostRepository
from infrastructure.database.repositories.sqlalchemy_profile_repo import SQLAlchemyProfileRepository
from infrastructure.database.repositories.sqlalchemy_user_repo import SQLAlchemyUserRepository


class SQLAlchemyUnitOfWork:
    """One session per ``async with`` block; repositories share it."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._users: Optional[SQLAlchemyUserRepository] = None
        self._profiles: Optional[SQLAlchemyProfileRepository] = None
        self._posts: Optional[SQLAlchemyPostRepository] = None

    @property
    def users(self) -> SQLAlchemyUserRepository:
        return self._require(self._users)

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        return self._require(self._profiles)

    @property
    def posts(self) -> SQLAlchemyPostRepository:
        return self._require(self._posts)

    @staticmethod
    def _require(repository: Any) -> Any:
        if repository is None:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return repository

    async def commit(self) -> None:
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        session = self._session_factory()
        self._session = session
        self._users = SQLAlchemyUserRepository(session)
        self._profiles = SQLAlchemyProfileRepository(session)
        self._posts = SQLAlchemyPostRepository(session)
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Any,
    ) -> None:
        """Roll back on error, then release the session."""
        if self._session is None:
            return
        try:
            if exc_type:
                await self.rollback()
        finally:
            await self._session.close()
            self._session = None
            self._users = self._profiles = self._posts = None
