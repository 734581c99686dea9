"""PagePermission entity - role granted to one principal on one page."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pageperm.domain.value_objects import Principal, SpaceRole


@dataclass
class PagePermission:
    """Grant of a role to exactly one user or one group on a page."""

    id: UUID
    page_id: UUID
    role: SpaceRole
    workspace_id: UUID
    created_at: datetime
    updated_at: datetime
    user_id: UUID | None = None
    group_id: UUID | None = None
    added_by_id: UUID | None = None
    deleted_at: datetime | None = None

    @property
    def principal(self) -> Principal:
        if self.user_id is not None:
            return Principal.user(self.user_id)
        return Principal.group(self.group_id)


@dataclass
class PermissionUser:
    """Display attributes of a user holding a grant."""

    id: UUID
    name: str | None
    email: str | None
    avatar_url: str | None = None


@dataclass
class PermissionGroup:
    """Display attributes of a group holding a grant."""

    id: UUID
    name: str | None
    is_default: bool = False


@dataclass
class PagePermissionListItem:
    """Grant joined with its principal, as returned by page listings."""

    id: UUID
    role: SpaceRole
    created_at: datetime
    user: PermissionUser | None = None
    group: PermissionGroup | None = None
