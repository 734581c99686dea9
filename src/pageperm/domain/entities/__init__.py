"""Domain entities."""

from pageperm.domain.entities.page import Page
from pageperm.domain.entities.page_permission import (
    PagePermission,
    PagePermissionListItem,
    PermissionGroup,
    PermissionUser,
)

__all__ = [
    "Page",
    "PagePermission",
    "PagePermissionListItem",
    "PermissionGroup",
    "PermissionUser",
]
