"""Generic, authorization-scoped list queries over SQLAlchemy models."""

from .access import AccessScope, access_predicate, can_access, resolve_access_scope
from .fields import INSPECTION_FIELDS, PUMP_FIELDS
from .pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PagedResult,
    clamp_page_size,
    paginate,
    total_pages,
)
from .predicates import (
    build_filter_predicate,
    build_predicate,
    build_search_predicate,
    parse_filter,
)
from .registry import FieldRegistry, FieldSpec, FieldType
from .sorting import SortDirection, resolve_sort

__all__ = [
    "AccessScope",
    "DEFAULT_PAGE_SIZE",
    "FieldRegistry",
    "FieldSpec",
    "FieldType",
    "INSPECTION_FIELDS",
    "MAX_PAGE_SIZE",
    "PUMP_FIELDS",
    "PagedResult",
    "SortDirection",
    "access_predicate",
    "build_filter_predicate",
    "build_predicate",
    "build_search_predicate",
    "can_access",
    "clamp_page_size",
    "paginate",
    "parse_filter",
    "resolve_access_scope",
    "resolve_sort",
    "total_pages",
]
