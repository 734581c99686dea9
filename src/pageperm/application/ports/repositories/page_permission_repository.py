"""Page permission repository port."""

from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from pageperm.application.dto.pagination import PaginatedResult, PaginationOptions
from pageperm.domain.entities import PagePermission, PagePermissionListItem
from pageperm.domain.value_objects import SpaceRole


class PagePermissionRepository(Protocol):
    """Port for page permission persistence."""

    async def get_by_id(self, permission_id: UUID) -> PagePermission | None: ...

    async def get_by_page_and_user(
        self, page_id: UUID, user_id: UUID
    ) -> PagePermission | None: ...

    async def get_by_page_and_group(
        self, page_id: UUID, group_id: UUID
    ) -> PagePermission | None: ...

    async def find_existing_user_ids(
        self, page_id: UUID, user_ids: Iterable[UUID]
    ) -> set[UUID]: ...

    async def find_existing_group_ids(
        self, page_id: UUID, group_ids: Iterable[UUID]
    ) -> set[UUID]: ...

    async def create(self, permission: PagePermission) -> PagePermission: ...

    async def create_batch(
        self, permissions: list[PagePermission]
    ) -> list[PagePermission]: ...

    async def update_role(
        self, permission_id: UUID, role: SpaceRole
    ) -> PagePermission | None: ...

    async def delete(self, permission_id: UUID) -> None: ...

    async def list_by_page(
        self, page_id: UUID, pagination: PaginationOptions
    ) -> PaginatedResult[PagePermissionListItem]: ...

    async def get_user_page_roles(self, user_id: UUID, page_id: UUID) -> list[SpaceRole]: ...
