"""Resolve the space role that caps a principal's page role."""

from uuid import UUID

from pageperm.application.ports import UnitOfWork
from pageperm.domain.value_objects import Principal, SpaceRole, highest_role


async def resolve_space_role(
    uow: UnitOfWork, principal: Principal, space_id: UUID
) -> SpaceRole | None:
    """Highest space role of a user, or the group's own space role."""
    if principal.is_user:
        roles = await uow.space_members.get_user_space_roles(principal.id, space_id)
        return highest_role(roles)
    return await uow.space_members.get_group_space_role(principal.id, space_id)
