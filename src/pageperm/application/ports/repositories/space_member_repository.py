"""Space member repository port."""

from typing import Protocol
from uuid import UUID

from pageperm.domain.value_objects import SpaceRole


class SpaceMemberRepository(Protocol):
    """Port for space membership roles."""

    async def get_user_space_roles(self, user_id: UUID, space_id: UUID) -> list[SpaceRole]:
        """Roles of the user in the space, direct and through groups."""
        ...

    async def get_group_space_role(self, group_id: UUID, space_id: UUID) -> SpaceRole | None:
        """Role of the group's own space membership, if any."""
        ...
