"""Page access resolver port - effective page role of a user."""

from typing import Protocol
from uuid import UUID

from pageperm.domain.value_objects import SpaceRole


class PageAccessResolver(Protocol):
    """Port for resolving a user's access to a page from page grants."""

    async def has_access(self, user_id: UUID, page_id: UUID) -> bool: ...

    async def highest_role(self, user_id: UUID, page_id: UUID) -> SpaceRole | None: ...
