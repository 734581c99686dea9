"""Offset pagination DTOs."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pageperm.domain.exceptions import ValidationError

T = TypeVar("T")

MAX_LIMIT = 100


@dataclass(frozen=True)
class PaginationOptions:
    """Page number (1-based) and page size."""

    page: int = 1
    limit: int = 20

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("page must be >= 1")
        if not 1 <= self.limit <= MAX_LIMIT:
            raise ValidationError(f"limit must be between 1 and {MAX_LIMIT}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class PaginatedResult(Generic[T]):
    """One page of items plus navigation meta."""

    items: list[T] = field(default_factory=list)
    page: int = 1
    per_page: int = 20
    has_next_page: bool = False
    has_prev_page: bool = False
