"""Page repository port."""

from typing import Protocol
from uuid import UUID

from pageperm.domain.entities import Page


class PageRepository(Protocol):
    """Port for page lookup."""

    async def get_by_id(self, page_id: UUID) -> Page | None: ...
