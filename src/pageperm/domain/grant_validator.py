"""Grant validation rules. Pure functions, no I/O."""

from uuid import UUID

from pageperm.domain.exceptions import InvalidGrantShape, RoleEscalation
from pageperm.domain.value_objects import Principal, SpaceRole, role_exceeds


def check_shape(user_id: UUID | None, group_id: UUID | None) -> Principal:
    """Return the principal if exactly one of user_id/group_id is set."""
    if user_id is None and group_id is None:
        raise InvalidGrantShape("Either userId or groupId must be provided")
    if user_id is not None and group_id is not None:
        raise InvalidGrantShape("Only one of userId or groupId can be provided")
    if user_id is not None:
        return Principal.user(user_id)
    return Principal.group(group_id)


def check_escalation(role: SpaceRole, highest_space_role: SpaceRole | None) -> None:
    """Reject a page role above the principal's space role.

    A principal without a space role is not capped.
    """
    if role_exceeds(role, highest_space_role):
        raise RoleEscalation("Page role cannot exceed existing space role")
