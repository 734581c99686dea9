"""List page permissions use case."""

from uuid import UUID

from pageperm.application.dto.pagination import PaginatedResult, PaginationOptions
from pageperm.domain.entities import PagePermissionListItem
from pageperm.domain.exceptions import PageNotFound


class ListPagePermissionsUseCase:
    """List grants on a page, oldest first."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, page_id: UUID, pagination: PaginationOptions
    ) -> PaginatedResult[PagePermissionListItem]:
        async with self._uow_factory() as uow:
            page = await uow.pages.get_by_id(page_id)
            if not page:
                raise PageNotFound(page_id)
            return await uow.page_permissions.list_by_page(page_id, pagination)
