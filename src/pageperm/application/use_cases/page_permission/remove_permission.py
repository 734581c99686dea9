"""Remove page permission use case."""

import logging
from uuid import UUID

from pageperm.domain.exceptions import PermissionNotFound

logger = logging.getLogger(__name__)


class RemovePagePermissionUseCase:
    """Delete a page grant."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, permission_id: UUID) -> None:
        async with self._uow_factory() as uow:
            permission = await uow.page_permissions.get_by_id(permission_id)
            if not permission:
                raise PermissionNotFound(permission_id)
            await uow.page_permissions.delete(permission_id)

        logger.info(
            "Page permission removed: id=%s page=%s", permission_id, permission.page_id
        )
