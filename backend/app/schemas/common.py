"""Shared schema definitions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Generic, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..errors import ErrorKind
from ..query import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PagedResult, SortDirection, clamp_page_size

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base schema serialised with camelCase names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class QueryParameters(ApiModel):
    """Paging, sorting, search and filter options accepted by list endpoints."""

    page_number: int = Field(default=1, ge=1)
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: Optional[str] = None
    sort_direction: SortDirection = SortDirection.ASC
    search: Optional[str] = None
    filter: Optional[str] = None

    @field_validator("page_size")
    @classmethod
    def clamp_page_size_value(cls, value: int) -> int:
        return clamp_page_size(value)

    @field_validator("sort_direction", mode="before")
    @classmethod
    def parse_sort_direction(cls, value):
        if value is None or isinstance(value, str):
            return SortDirection.parse(value)
        return value


class PaginatedResponse(ApiModel, Generic[T]):
    """Standard envelope for paginated listings."""

    data: Sequence[T]
    total_count: int = Field(..., ge=0)
    page_number: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1, le=MAX_PAGE_SIZE)
    total_pages: int = Field(..., ge=0)
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def from_page(cls, page: PagedResult[T]) -> "PaginatedResponse[T]":
        return cls(
            data=list(page.items),
            total_count=page.total_count,
            page_number=page.page_number,
            page_size=page.page_size,
            total_pages=page.total_pages,
            has_previous_page=page.has_previous_page,
            has_next_page=page.has_next_page,
        )


class ErrorResponse(ApiModel):
    """Failure envelope returned for every handled error."""

    success: bool = False
    error_code: ErrorKind
    message: str
    details: Optional[str] = None
    validation_errors: Optional[dict[str, list[str]]] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    trace_id: Optional[str] = None


class MessageResponse(ApiModel):
    success: bool = True
    message: str
