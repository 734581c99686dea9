"""Page access resolver - effective page role from page grants."""

from uuid import UUID

from pageperm.domain.value_objects import SpaceRole, highest_role


class PagePermissionAccessResolver:
    """Resolves a user's page role from direct and group page grants.

    Page grants are the only source: a user without any grant on the page has
    no access here, whatever their space role. Callers that want space roles
    to confer baseline access must combine the two themselves.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def has_access(self, user_id: UUID, page_id: UUID) -> bool:
        """True if the user holds any role on the page."""
        async with self._uow_factory() as uow:
            roles = await uow.page_permissions.get_user_page_roles(user_id, page_id)
        return len(roles) > 0

    async def highest_role(self, user_id: UUID, page_id: UUID) -> SpaceRole | None:
        """Highest role the user holds on the page, directly or via a group."""
        async with self._uow_factory() as uow:
            roles = await uow.page_permissions.get_user_page_roles(user_id, page_id)
        return highest_role(roles)
