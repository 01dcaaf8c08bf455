"""Query-string dependency shared by the paginated list endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import Query

from .. import schemas
from ..query import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


def get_query_parameters(
    page_number: int = Query(1, ge=1, alias="pageNumber", description="1-based page to return"),
    page_size: int = Query(
        DEFAULT_PAGE_SIZE,
        alias="pageSize",
        description=f"Rows per page; values are clamped to 1..{MAX_PAGE_SIZE}",
    ),
    sort_by: Optional[str] = Query(
        None,
        alias="sortBy",
        description="Registered sort key; unknown keys leave the order unspecified",
    ),
    sort_direction: Optional[str] = Query(
        "asc", alias="sortDirection", description="'asc' or 'desc'"
    ),
    search: Optional[str] = Query(
        None,
        description="Case-insensitive text matched against text fields only; "
        "enum, numeric, date and boolean fields are not searched",
    ),
    filter: Optional[str] = Query(
        None,
        description="Exact matches as 'key1:value1,key2:value2'; unknown keys are ignored; "
        "dates are given as YYYY-MM-DD and match the whole day",
    ),
) -> schemas.QueryParameters:
    return schemas.QueryParameters(
        page_number=page_number,
        page_size=page_size,
        sort_by=sort_by,
        sort_direction=sort_direction,
        search=search,
        filter=filter,
    )
