"""Page entity - the subset of a page the permission engine needs."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Page:
    """Page inside a space, owned by a workspace."""

    id: UUID
    space_id: UUID
    workspace_id: UUID
