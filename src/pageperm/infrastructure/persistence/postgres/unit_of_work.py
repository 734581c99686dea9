"""PostgreSQL Unit of Work implementation."""

import logging
from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from pageperm.infrastructure.persistence.postgres.page_permission_repository import (
    PostgresPagePermissionRepository,
)
from pageperm.infrastructure.persistence.postgres.page_repository import (
    PostgresPageRepository,
)
from pageperm.infrastructure.persistence.postgres.space_member_repository import (
    PostgresSpaceMemberRepository,
)

logger = logging.getLogger(__name__)


class PostgresUnitOfWork:
    """Pages, grants and space memberships read and written on one pooled connection.

    Nothing is visible to other connections until commit().
    """

    pages: PostgresPageRepository
    page_permissions: PostgresPagePermissionRepository
    space_members: PostgresSpaceMemberRepository

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._stack = AsyncExitStack()
        self._conn: AsyncConnection | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn = await self._stack.enter_async_context(self._pool.connection())
        self.pages = PostgresPageRepository(self._conn)
        self.page_permissions = PostgresPagePermissionRepository(self._conn)
        self.space_members = PostgresSpaceMemberRepository(self._conn)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        try:
            if exc_type is not None:
                await self.rollback()
        finally:
            self._conn = None
            await self._stack.aclose()

    async def commit(self) -> None:
        if self._conn is not None:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn is not None:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool):
    """Factory of units of work: commits on normal exit, rolls back on error."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        async with PostgresUnitOfWork(pool) as uow:
            try:
                yield uow
            except BaseException as e:
                logger.debug("Rolling back unit of work: %s", type(e).__name__)
                await uow.rollback()
                raise
            await uow.commit()

    return factory
