"""Per-entity whitelists of the fields reachable from list query parameters.

Only columns registered here can be sorted, searched or filtered on. Request
values select entries by key; they are never interpolated into SQL.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional


class FieldType(str, enum.Enum):
    """Type tags that decide how a filter value is coerced and whether search applies."""

    STRING = "string"
    ENUM = "enum"
    NUMERIC = "numeric"
    DATE = "date"
    BOOL = "bool"


@dataclass(frozen=True, eq=False)
class FieldSpec:
    """A mapped column together with its type tag."""

    column: Any
    field_type: FieldType = FieldType.STRING
    enum_cls: Optional[type[enum.Enum]] = None

    def __post_init__(self) -> None:
        if self.field_type is FieldType.ENUM and self.enum_cls is None:
            raise ValueError("Enum fields must declare enum_cls")


def _normalize_key(key: str) -> str:
    return key.strip().lower()


def _freeze(entries: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType({_normalize_key(key): value for key, value in entries.items()})


@dataclass(frozen=True, eq=False)
class FieldRegistry:
    """Sortable and filterable fields for a single entity kind.

    ``sortable`` maps an external key to the column to order by. ``filterable``
    maps an external key to a :class:`FieldSpec`; the ``STRING`` entries also
    define the free-text search surface. ``owner_column`` is compared with the
    caller id for owner-scoped roles and ``tie_breaker`` orders rows that share
    the same sort value.
    """

    name: str
    owner_column: Any
    tie_breaker: Any
    sortable: Mapping[str, Any] = field(default_factory=dict)
    filterable: Mapping[str, FieldSpec] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "sortable", _freeze(self.sortable))
        object.__setattr__(self, "filterable", _freeze(self.filterable))

    def sort_column(self, key: str | None) -> Any | None:
        if not key or not key.strip():
            return None
        return self.sortable.get(_normalize_key(key))

    def filter_field(self, key: str | None) -> FieldSpec | None:
        if not key or not key.strip():
            return None
        return self.filterable.get(_normalize_key(key))

    def searchable_columns(self) -> list[Any]:
        """Columns included in free-text search: string-tagged filterable fields only."""

        return [
            spec.column
            for spec in self.filterable.values()
            if spec.field_type is FieldType.STRING
        ]
