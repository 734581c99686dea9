"""Grant page permission use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID, uuid4

from pageperm.application.use_cases.page_permission.space_role import resolve_space_role
from pageperm.domain import grant_validator
from pageperm.domain.entities import PagePermission
from pageperm.domain.exceptions import DuplicateGrant, PageNotFound
from pageperm.domain.value_objects import SpaceRole

logger = logging.getLogger(__name__)


class GrantPagePermissionUseCase:
    """Grant a role on a page to one user or one group."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        actor_id: UUID,
        page_id: UUID,
        role: SpaceRole,
        user_id: UUID | None = None,
        group_id: UUID | None = None,
    ) -> PagePermission:
        """Validate, check for duplicates, cap against space role, then insert.

        The duplicate lookup only short-circuits the common case; a racing insert
        is rejected by the store and surfaces as DuplicateGrant as well.
        """
        async with self._uow_factory() as uow:
            page = await uow.pages.get_by_id(page_id)
            if not page:
                raise PageNotFound(page_id)

            principal = grant_validator.check_shape(user_id, group_id)

            if principal.is_user:
                existing = await uow.page_permissions.get_by_page_and_user(
                    page_id, principal.id
                )
            else:
                existing = await uow.page_permissions.get_by_page_and_group(
                    page_id, principal.id
                )
            if existing:
                raise DuplicateGrant("Permission already exists")

            space_role = await resolve_space_role(uow, principal, page.space_id)
            grant_validator.check_escalation(role, space_role)

            now = datetime.now(UTC)
            permission = PagePermission(
                id=uuid4(),
                page_id=page_id,
                user_id=principal.user_id,
                group_id=principal.group_id,
                role=role,
                added_by_id=actor_id,
                workspace_id=page.workspace_id,
                created_at=now,
                updated_at=now,
            )
            await uow.page_permissions.create(permission)

        logger.info(
            "Page permission granted: page=%s %s=%s role=%s by=%s",
            page_id,
            principal.type,
            principal.id,
            role,
            actor_id,
        )
        return permission
