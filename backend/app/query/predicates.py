"""Compose the access, search and filter clauses of a list query."""

from __future__ import annotations

import enum
import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement

from ..errors import FilterParseError
from ..models import UserRole
from .access import access_predicate
from .registry import FieldRegistry, FieldSpec, FieldType

LOGGER = logging.getLogger(__name__)

FILTER_PAIR_SEPARATOR = ","
FILTER_KEY_VALUE_SEPARATOR = ":"

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}


def build_search_predicate(
    registry: FieldRegistry, search: Optional[str]
) -> Optional[ColumnElement[bool]]:
    """Match ``search`` case-insensitively against every string field.

    Enum, numeric, date and bool fields never take part in free-text search.
    Wildcard characters in the term are escaped and matched literally.
    """

    term = (search or "").strip()
    if not term:
        return None
    columns = registry.searchable_columns()
    if not columns:
        return None
    return or_(*(column.icontains(term, autoescape=True) for column in columns))


def parse_filter(raw_filter: str) -> list[tuple[str, str]]:
    """Split ``key1:value1,key2:value2`` into normalised ``(key, value)`` pairs.

    Pairs without exactly one separator or with an empty key are skipped.
    A key given twice makes the whole string ambiguous and raises
    :class:`FilterParseError`.
    """

    pairs: list[tuple[str, str]] = []
    seen: set[str] = set()
    for chunk in raw_filter.split(FILTER_PAIR_SEPARATOR):
        tokens = chunk.split(FILTER_KEY_VALUE_SEPARATOR)
        if len(tokens) != 2:
            LOGGER.debug("Skipping malformed filter pair %r", chunk)
            continue
        key = tokens[0].strip().lower()
        value = tokens[1].strip()
        if not key:
            LOGGER.debug("Skipping filter pair without key %r", chunk)
            continue
        if key in seen:
            raise FilterParseError(f"Filter key '{key}' appears more than once")
        seen.add(key)
        pairs.append((key, value))
    return pairs


def _match_enum(enum_cls: type[enum.Enum], raw_value: str) -> Optional[enum.Enum]:
    lowered = raw_value.lower()
    for member in enum_cls:
        if member.name.lower() == lowered or str(member.value).lower() == lowered:
            return member
    return None


def _equals_condition(spec: FieldSpec, raw_value: str) -> Optional[ColumnElement[bool]]:
    column = spec.column
    if spec.field_type is FieldType.STRING:
        return column == raw_value

    if spec.field_type is FieldType.ENUM:
        member = _match_enum(spec.enum_cls, raw_value)
        return None if member is None else column == member

    if spec.field_type is FieldType.NUMERIC:
        try:
            number = float(raw_value)
        except ValueError:
            return None
        return column == number

    if spec.field_type is FieldType.BOOL:
        lowered = raw_value.lower()
        if lowered in _TRUE_VALUES:
            return column.is_(True)
        if lowered in _FALSE_VALUES:
            return column.is_(False)
        return None

    try:
        day = date.fromisoformat(raw_value)
    except ValueError:
        return None
    start = datetime.combine(day, time.min)
    return and_(column >= start, column < start + timedelta(days=1))


def build_filter_predicate(
    registry: FieldRegistry, raw_filter: Optional[str]
) -> Optional[ColumnElement[bool]]:
    """AND together an exact match for every registered, well-formed pair."""

    if not raw_filter or not raw_filter.strip():
        return None

    conditions = []
    for key, value in parse_filter(raw_filter):
        spec = registry.filter_field(key)
        if spec is None:
            LOGGER.debug("Ignoring unregistered %s filter key %r", registry.name, key)
            continue
        condition = _equals_condition(spec, value)
        if condition is None:
            LOGGER.debug(
                "Ignoring %s filter %r: %r is not a valid %s value",
                registry.name,
                key,
                value,
                spec.field_type.value,
            )
            continue
        conditions.append(condition)

    if not conditions:
        return None
    return and_(*conditions)


def build_predicate(
    registry: FieldRegistry,
    *,
    role: UserRole,
    caller_id: int,
    search: Optional[str] = None,
    raw_filter: Optional[str] = None,
) -> ColumnElement[bool]:
    """Return ``access AND search AND filter`` for one list request.

    A filter string that fails to parse is skipped entirely and the request
    continues unfiltered.
    """

    clauses = [access_predicate(registry, role=role, caller_id=caller_id)]

    search_clause = build_search_predicate(registry, search)
    if search_clause is not None:
        clauses.append(search_clause)

    try:
        filter_clause = build_filter_predicate(registry, raw_filter)
    except FilterParseError as exc:
        LOGGER.warning(
            "Ignoring %s filter %r (%s): %s",
            registry.name,
            raw_filter,
            exc.kind.value,
            exc.message,
        )
        filter_clause = None
    if filter_clause is not None:
        clauses.append(filter_clause)

    return and_(*clauses)
