"""Principal - the user or group a page grant is bound to."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class PrincipalType(StrEnum):
    """Kind of principal."""

    USER = "user"
    GROUP = "group"


@dataclass(frozen=True)
class Principal:
    """Exactly one user or one group."""

    type: PrincipalType
    id: UUID

    @classmethod
    def user(cls, user_id: UUID) -> "Principal":
        return cls(PrincipalType.USER, user_id)

    @classmethod
    def group(cls, group_id: UUID) -> "Principal":
        return cls(PrincipalType.GROUP, group_id)

    @property
    def is_user(self) -> bool:
        return self.type is PrincipalType.USER

    @property
    def user_id(self) -> UUID | None:
        return self.id if self.type is PrincipalType.USER else None

    @property
    def group_id(self) -> UUID | None:
        return self.id if self.type is PrincipalType.GROUP else None
