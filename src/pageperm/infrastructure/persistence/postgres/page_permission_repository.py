"""PostgreSQL page permission repository implementation."""

from collections.abc import Iterable
from datetime import UTC, datetime
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from pageperm.application.dto.pagination import PaginatedResult, PaginationOptions
from pageperm.domain.entities import (
    PagePermission,
    PagePermissionListItem,
    PermissionGroup,
    PermissionUser,
)
from pageperm.domain.exceptions import DuplicateGrant
from pageperm.domain.value_objects import SpaceRole

_FIELDS = (
    "id, page_id, user_id, group_id, role, added_by_id, workspace_id, "
    "created_at, updated_at, deleted_at"
)


def _row_to_permission(r: tuple) -> PagePermission:
    return PagePermission(
        id=r[0],
        page_id=r[1],
        user_id=r[2],
        group_id=r[3],
        role=SpaceRole(r[4]),
        added_by_id=r[5],
        workspace_id=r[6],
        created_at=r[7],
        updated_at=r[8],
        deleted_at=r[9],
    )


class PostgresPagePermissionRepository:
    """Page permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: UUID) -> PagePermission | None:
        """Get permission by id."""
        cur = await self._conn.execute(
            f"SELECT {_FIELDS} FROM page_permissions WHERE id = %s AND deleted_at IS NULL",
            (permission_id,),
        )
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def get_by_page_and_user(
        self, page_id: UUID, user_id: UUID
    ) -> PagePermission | None:
        """Get the user's direct grant on page."""
        cur = await self._conn.execute(
            f"SELECT {_FIELDS} FROM page_permissions "
            "WHERE page_id = %s AND user_id = %s AND deleted_at IS NULL",
            (page_id, user_id),
        )
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def get_by_page_and_group(
        self, page_id: UUID, group_id: UUID
    ) -> PagePermission | None:
        """Get the group's grant on page."""
        cur = await self._conn.execute(
            f"SELECT {_FIELDS} FROM page_permissions "
            "WHERE page_id = %s AND group_id = %s AND deleted_at IS NULL",
            (page_id, group_id),
        )
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def find_existing_user_ids(
        self, page_id: UUID, user_ids: Iterable[UUID]
    ) -> set[UUID]:
        """Return those user_ids that already hold a grant on page."""
        cur = await self._conn.execute(
            "SELECT user_id FROM page_permissions "
            "WHERE page_id = %s AND user_id = ANY(%s) AND deleted_at IS NULL",
            (page_id, list(user_ids)),
        )
        rows = await cur.fetchall()
        return {r[0] for r in rows}

    async def find_existing_group_ids(
        self, page_id: UUID, group_ids: Iterable[UUID]
    ) -> set[UUID]:
        """Return those group_ids that already hold a grant on page."""
        cur = await self._conn.execute(
            "SELECT group_id FROM page_permissions "
            "WHERE page_id = %s AND group_id = ANY(%s) AND deleted_at IS NULL",
            (page_id, list(group_ids)),
        )
        rows = await cur.fetchall()
        return {r[0] for r in rows}

    async def create(self, permission: PagePermission) -> PagePermission:
        """Create permission. A concurrent duplicate raises DuplicateGrant."""
        try:
            await self._conn.execute(
                f"INSERT INTO page_permissions ({_FIELDS}) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
                _permission_params(permission),
            )
        except UniqueViolation as e:
            raise DuplicateGrant("Permission already exists") from e
        return permission

    async def create_batch(self, permissions: list[PagePermission]) -> list[PagePermission]:
        """Insert permissions in one statement, skipping rows that conflict.

        Returns only the permissions that were inserted.
        """
        if not permissions:
            return []
        values = ", ".join(["(%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)"] * len(permissions))
        params: list[object] = []
        for p in permissions:
            params.extend(_permission_params(p))
        cur = await self._conn.execute(
            f"INSERT INTO page_permissions ({_FIELDS}) VALUES {values} "
            "ON CONFLICT DO NOTHING RETURNING id",
            params,
        )
        rows = await cur.fetchall()
        inserted = {r[0] for r in rows}
        return [p for p in permissions if p.id in inserted]

    async def update_role(
        self, permission_id: UUID, role: SpaceRole
    ) -> PagePermission | None:
        """Update role and touch updated_at."""
        cur = await self._conn.execute(
            "UPDATE page_permissions SET role = %s, updated_at = %s "
            f"WHERE id = %s AND deleted_at IS NULL RETURNING {_FIELDS}",
            (role.value, datetime.now(UTC), permission_id),
        )
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def delete(self, permission_id: UUID) -> None:
        """Delete permission."""
        await self._conn.execute(
            "DELETE FROM page_permissions WHERE id = %s",
            (permission_id,),
        )

    async def list_by_page(
        self, page_id: UUID, pagination: PaginationOptions
    ) -> PaginatedResult[PagePermissionListItem]:
        """List grants on page with user/group display fields, oldest first."""
        cur = await self._conn.execute(
            """
            SELECT pp.id, pp.role, pp.created_at,
                   u.id, u.name, u.email, u.avatar_url,
                   g.id, g.name, g.is_default
            FROM page_permissions pp
            LEFT JOIN users u ON u.id = pp.user_id
            LEFT JOIN groups g ON g.id = pp.group_id
            WHERE pp.page_id = %s AND pp.deleted_at IS NULL
            ORDER BY pp.created_at ASC, pp.id ASC
            LIMIT %s OFFSET %s
            """,
            (page_id, pagination.limit + 1, pagination.offset),
        )
        rows = await cur.fetchall()
        items = [
            PagePermissionListItem(
                id=r[0],
                role=SpaceRole(r[1]),
                created_at=r[2],
                user=PermissionUser(id=r[3], name=r[4], email=r[5], avatar_url=r[6])
                if r[3]
                else None,
                group=PermissionGroup(id=r[7], name=r[8], is_default=bool(r[9]))
                if r[7]
                else None,
            )
            for r in rows[: pagination.limit]
        ]
        return PaginatedResult(
            items=items,
            page=pagination.page,
            per_page=pagination.limit,
            has_next_page=len(rows) > pagination.limit,
            has_prev_page=pagination.page > 1,
        )

    async def get_user_page_roles(self, user_id: UUID, page_id: UUID) -> list[SpaceRole]:
        """Roles the user holds on page: direct grant plus grants to the user's groups."""
        cur = await self._conn.execute(
            """
            SELECT pp.role FROM page_permissions pp
            WHERE pp.user_id = %s AND pp.page_id = %s AND pp.deleted_at IS NULL
            UNION ALL
            SELECT pp.role FROM page_permissions pp
            JOIN group_users gu ON gu.group_id = pp.group_id
            WHERE gu.user_id = %s AND pp.page_id = %s AND pp.deleted_at IS NULL
            """,
            (user_id, page_id, user_id, page_id),
        )
        rows = await cur.fetchall()
        return [SpaceRole(r[0]) for r in rows]


def _permission_params(p: PagePermission) -> tuple:
    return (
        p.id,
        p.page_id,
        p.user_id,
        p.group_id,
        p.role.value,
        p.added_by_id,
        p.workspace_id,
        p.created_at,
        p.updated_at,
        p.deleted_at,
    )
