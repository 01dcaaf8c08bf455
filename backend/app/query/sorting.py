"""Resolve the requested sort key into an ORDER BY clause."""

from __future__ import annotations

import enum
from typing import Any, Optional

from .registry import FieldRegistry


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "SortDirection":
        """Anything other than ``desc`` (any case) sorts ascending."""

        if raw is not None and raw.strip().lower() == cls.DESC.value:
            return cls.DESC
        return cls.ASC


def resolve_sort(
    registry: FieldRegistry,
    sort_by: Optional[str],
    direction: SortDirection | str | None = SortDirection.ASC,
) -> list[Any]:
    """Return the ordering for ``sort_by`` or an empty list when it is not sortable.

    A registered key yields the mapped column in the requested direction
    followed by the registry's tie-breaker ascending, so rows sharing a sort
    value keep the same relative order from one page to the next.
    """

    column = registry.sort_column(sort_by)
    if column is None:
        return []
    if not isinstance(direction, SortDirection):
        direction = SortDirection.parse(direction)
    primary = column.desc() if direction is SortDirection.DESC else column.asc()
    return [primary, registry.tie_breaker.asc()]
