"""PostgreSQL page repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from pageperm.domain.entities import Page


class PostgresPageRepository:
    """Page lookup against the pages table."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, page_id: UUID) -> Page | None:
        """Get page by id."""
        cur = await self._conn.execute(
            "SELECT id, space_id, workspace_id FROM pages WHERE id = %s AND deleted_at IS NULL",
            (page_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Page(id=r[0], space_id=r[1], workspace_id=r[2])
