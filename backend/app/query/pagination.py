"""Windowing and page metadata for list queries."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Generic, Sequence, TypeVar

T = TypeVar("T")
U = TypeVar("U")

MAX_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE = 10


def clamp_page_size(page_size: int) -> int:
    """Bound a requested page size to ``1..MAX_PAGE_SIZE``."""
    return max(1, min(page_size, MAX_PAGE_SIZE))


def window_offset(page_number: int, page_size: int) -> int:
    """Number of rows skipped before the first row of ``page_number``."""
    return (page_number - 1) * page_size


def total_pages(total_count: int, page_size: int) -> int:
    """Pages needed for ``total_count`` rows; zero when there are none."""
    if total_count <= 0:
        return 0
    return math.ceil(total_count / page_size)


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    """One page of rows plus the counts needed to navigate the rest."""

    items: Sequence[T]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "total_pages", total_pages(self.total_count, self.page_size))

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    def map(self, mapper: Callable[[T], U]) -> "PagedResult[U]":
        return PagedResult(
            items=[mapper(item) for item in self.items],
            total_count=self.total_count,
            page_number=self.page_number,
            page_size=self.page_size,
        )


def paginate(query, *, page_number: int, page_size: int, total_count: int) -> PagedResult:
    """Fetch the ``[skip, skip + page_size)`` window of an already counted query.

    Pages starting past the last row are returned empty without querying.
    """

    skip = window_offset(page_number, page_size)
    if skip >= total_count:
        return PagedResult(
            items=[],
            total_count=total_count,
            page_number=page_number,
            page_size=page_size,
        )

    items = (
        query.offset(skip)
        .limit(page_size)
        .all()
    )
    return PagedResult(
        items=items,
        total_count=total_count,
        page_number=page_number,
        page_size=page_size,
    )
