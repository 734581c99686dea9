"""Repository ports."""

from pageperm.application.ports.repositories.page_permission_repository import (
    PagePermissionRepository,
)
from pageperm.application.ports.repositories.page_repository import PageRepository
from pageperm.application.ports.repositories.space_member_repository import (
    SpaceMemberRepository,
)

__all__ = [
    "PagePermissionRepository",
    "PageRepository",
    "SpaceMemberRepository",
]
