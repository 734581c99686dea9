"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from pageperm.application.ports.repositories.page_permission_repository import (
    PagePermissionRepository,
)
from pageperm.application.ports.repositories.page_repository import PageRepository
from pageperm.application.ports.repositories.space_member_repository import (
    SpaceMemberRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def pages(self) -> PageRepository: ...

    @property
    def page_permissions(self) -> PagePermissionRepository: ...

    @property
    def space_members(self) -> SpaceMemberRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
