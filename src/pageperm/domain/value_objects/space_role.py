"""Space role lattice: reader < writer < admin."""

from collections.abc import Iterable
from enum import StrEnum

from pageperm.domain.exceptions import InvalidRole


class SpaceRole(StrEnum):
    """Role a principal holds in a space or on a page."""

    READER = "reader"
    WRITER = "writer"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        """Position in the lattice; higher grants more."""
        return _RANKS[self]

    def exceeds(self, other: "SpaceRole | None") -> bool:
        """True if this role is strictly higher than other."""
        return role_exceeds(self, other)

    @classmethod
    def parse(cls, value: "str | SpaceRole") -> "SpaceRole":
        """Parse a role value, raising InvalidRole for unknown names."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidRole(f"Unknown role: {value!r}") from None


_RANKS = {
    SpaceRole.READER: 1,
    SpaceRole.WRITER: 2,
    SpaceRole.ADMIN: 3,
}


def role_exceeds(role: SpaceRole, compare_role: SpaceRole | None) -> bool:
    """Return True iff role strictly exceeds compare_role.

    A missing compare_role never blocks: the result is False.
    """
    if compare_role is None:
        return False
    return role.rank > compare_role.rank


def highest_role(roles: Iterable[SpaceRole]) -> SpaceRole | None:
    """Return the highest role in roles, or None if there are none."""
    highest: SpaceRole | None = None
    for role in roles:
        if highest is None or role_exceeds(role, highest):
            highest = role
    return highest
