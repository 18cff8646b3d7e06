"""Pagination DTOs shared by listing use cases."""

import math
from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def validate(self) -> List[str]:
        errors = []

        if self.page < 1:
            errors.append("page must be at least 1")

        if self.limit < 1:
            errors.append("limit must be at least 1")

        return errors


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the totals needed to render a pager."""

    items: List[T]
    total: int
    page: int
    limit: int
    extras: dict = field(default_factory=dict)

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0
