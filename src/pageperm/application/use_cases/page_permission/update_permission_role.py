"""Update page permission role use case."""

import logging
from uuid import UUID

from pageperm.application.use_cases.page_permission.space_role import resolve_space_role
from pageperm.domain import grant_validator
from pageperm.domain.entities import PagePermission
from pageperm.domain.exceptions import PageNotFound, PermissionNotFound
from pageperm.domain.value_objects import SpaceRole

logger = logging.getLogger(__name__)


class UpdatePagePermissionRoleUseCase:
    """Change the role of an existing page grant."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, permission_id: UUID, role: SpaceRole) -> PagePermission:
        """Re-check the escalation cap against the new role, then update."""
        async with self._uow_factory() as uow:
            permission = await uow.page_permissions.get_by_id(permission_id)
            if not permission:
                raise PermissionNotFound(permission_id)

            page = await uow.pages.get_by_id(permission.page_id)
            if not page:
                raise PageNotFound(permission.page_id)

            space_role = await resolve_space_role(
                uow, permission.principal, page.space_id
            )
            grant_validator.check_escalation(role, space_role)

            updated = await uow.page_permissions.update_role(permission_id, role)
            if not updated:
                raise PermissionNotFound(permission_id)

        logger.info(
            "Page permission role updated: id=%s role=%s->%s",
            permission_id,
            permission.role,
            role,
        )
        return updated
