"""Space ability port - space-level authorization gate."""

from enum import StrEnum
from typing import Protocol
from uuid import UUID


class SpaceAction(StrEnum):
    """Actions checked against a space."""

    MANAGE = "manage"
    READ = "read"


class SpaceSubject(StrEnum):
    """Subjects guarded inside a space."""

    PAGE_PERMISSION = "pagePermission"


class SpaceAbilityChecker(Protocol):
    """Port for checking what a user may do inside a space."""

    async def can(
        self, user_id: UUID, space_id: UUID, action: SpaceAction, subject: SpaceSubject
    ) -> bool: ...
