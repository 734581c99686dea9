"""Batch grant result DTOs."""

from dataclasses import dataclass, field
from enum import StrEnum

from pageperm.domain.value_objects import Principal


class GrantOutcome(StrEnum):
    """What happened to one candidate of a batch grant."""

    ADDED = "added"
    DUPLICATE = "duplicate"
    ESCALATION = "escalation"


@dataclass(frozen=True)
class BatchItemResult:
    """Outcome for one principal."""

    principal: Principal
    outcome: GrantOutcome


@dataclass
class BatchGrantResult:
    """Per-item outcomes of a batch grant."""

    items: list[BatchItemResult] = field(default_factory=list)

    @property
    def added(self) -> int:
        """Number of grants actually inserted."""
        return self.count(GrantOutcome.ADDED)

    def count(self, outcome: GrantOutcome) -> int:
        return sum(1 for item in self.items if item.outcome is outcome)
