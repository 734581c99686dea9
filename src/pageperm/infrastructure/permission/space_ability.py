"""Space ability checker - space role based authorization gate."""

from uuid import UUID

from pageperm.application.ports import SpaceAction, SpaceSubject
from pageperm.domain.value_objects import SpaceRole, highest_role

# Minimum space role required per (action, subject).
_REQUIRED_ROLE: dict[tuple[SpaceAction, SpaceSubject], SpaceRole] = {
    (SpaceAction.MANAGE, SpaceSubject.PAGE_PERMISSION): SpaceRole.ADMIN,
    (SpaceAction.READ, SpaceSubject.PAGE_PERMISSION): SpaceRole.READER,
}


class SpaceMemberAbilityChecker:
    """Checks space abilities against the user's highest space role."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def can(
        self, user_id: UUID, space_id: UUID, action: SpaceAction, subject: SpaceSubject
    ) -> bool:
        """Check if user may perform action on subject in space."""
        required = _REQUIRED_ROLE.get((action, subject))
        if required is None:
            return False

        async with self._uow_factory() as uow:
            roles = await uow.space_members.get_user_space_roles(user_id, space_id)

        role = highest_role(roles)
        if role is None:
            return False
        return not required.exceeds(role)
