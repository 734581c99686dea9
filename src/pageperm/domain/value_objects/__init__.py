"""Domain value objects."""

from pageperm.domain.value_objects.principal import Principal, PrincipalType
from pageperm.domain.value_objects.space_role import (
    SpaceRole,
    highest_role,
    role_exceeds,
)

__all__ = [
    "Principal",
    "PrincipalType",
    "SpaceRole",
    "highest_role",
    "role_exceeds",
]
