"""Paging helpers for list queries."""

from dataclasses import dataclass, field
from math import ceil
from typing import Any

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageRequest:
    """A normalised page request.

    Out-of-range input is corrected rather than rejected: a page below 1 becomes
    1 and a page size outside 1..100 falls back to the default of 10.
    """

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        if self.page is None or self.page < 1:
            object.__setattr__(self, "page", 1)
        if self.page_size is None or not 1 <= self.page_size <= MAX_PAGE_SIZE:
            object.__setattr__(self, "page_size", DEFAULT_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class Page:
    items: list[Any] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.page_size) if self.page_size else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def paginate(items: list[Any], request: PageRequest) -> Page:
    """Slice an already filtered and sorted list into a Page."""
    window = items[request.offset : request.offset + request.page_size]
    return Page(items=window, total=len(items), page=request.page, page_size=request.page_size)
