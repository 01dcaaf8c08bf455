"""Run the scoped search, filter, sort and paging pipeline for list endpoints."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query

from .. import schemas
from ..errors import QueryStoreError
from ..query import FieldRegistry, PagedResult, build_predicate, paginate, resolve_sort
from ..security import CallerIdentity

LOGGER = logging.getLogger(__name__)


class QueryBuilderService:
    """Turns query parameters into one page of rows visible to the caller."""

    @staticmethod
    def get_paged_result(
        query: Query,
        registry: FieldRegistry,
        caller: CallerIdentity,
        parameters: schemas.QueryParameters,
    ) -> PagedResult:
        """Filter ``query`` for ``caller``, count it, then sort and window it.

        Unknown sort, search or filter keys are ignored. Store failures are
        raised as :class:`QueryStoreError`; no partial page is ever returned.
        """

        predicate = build_predicate(
            registry,
            role=caller.role,
            caller_id=caller.user_id,
            search=parameters.search,
            raw_filter=parameters.filter,
        )
        filtered = query.filter(predicate)

        try:
            total_count = filtered.count()
            ordering = resolve_sort(registry, parameters.sort_by, parameters.sort_direction)
            if ordering:
                filtered = filtered.order_by(*ordering)
            return paginate(
                filtered,
                page_number=parameters.page_number,
                page_size=parameters.page_size,
                total_count=total_count,
            )
        except SQLAlchemyError as exc:
            LOGGER.error("Listing %s failed: %s", registry.name, exc)
            raise QueryStoreError(
                f"Error retrieving {registry.name}",
                details=exc.__class__.__name__,
            ) from exc
