"""Application ports - interfaces for external adapters."""

from pageperm.application.ports.page_access_resolver import PageAccessResolver
from pageperm.application.ports.space_ability import (
    SpaceAbilityChecker,
    SpaceAction,
    SpaceSubject,
)
from pageperm.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PageAccessResolver",
    "SpaceAbilityChecker",
    "SpaceAction",
    "SpaceSubject",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
