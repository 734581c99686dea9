"""PostgreSQL space member repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from pageperm.domain.value_objects import SpaceRole


class PostgresSpaceMemberRepository:
    """Space membership roles from the space_members table."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_user_space_roles(self, user_id: UUID, space_id: UUID) -> list[SpaceRole]:
        """Roles of user in space, directly and through group memberships."""
        cur = await self._conn.execute(
            """
            SELECT sm.role FROM space_members sm
            WHERE sm.space_id = %s AND sm.user_id = %s
            UNION ALL
            SELECT sm.role FROM space_members sm
            JOIN group_users gu ON gu.group_id = sm.group_id
            WHERE sm.space_id = %s AND gu.user_id = %s
            """,
            (space_id, user_id, space_id, user_id),
        )
        rows = await cur.fetchall()
        return [SpaceRole(r[0]) for r in rows]

    async def get_group_space_role(self, group_id: UUID, space_id: UUID) -> SpaceRole | None:
        """Role of the group's own space membership."""
        cur = await self._conn.execute(
            "SELECT role FROM space_members WHERE space_id = %s AND group_id = %s",
            (space_id, group_id),
        )
        r = await cur.fetchone()
        return SpaceRole(r[0]) if r else None
