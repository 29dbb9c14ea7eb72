"""Unit of Work protocol.

Services open one unit of work per operation. Repositories obtained from it
share a transaction that is only persisted by ``commit``; leaving the block
on an exception rolls it back.
"""

from typing import Any, Protocol

from domain.repositories.post_repository import IPostRepository
from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.user_repository import IUserRepository


class IUnitOfWork(Protocol):
    users: IUserRepository
    profiles: IProfileRepository
    posts: IPostRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def __aenter__(self) -> "IUnitOfWork": ...

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None: ...
