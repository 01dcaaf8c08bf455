"""Row-level visibility derived from the caller's role."""

from __future__ import annotations

import enum

from sqlalchemy import true
from sqlalchemy.sql.elements import ColumnElement

from ..models import UserRole
from .registry import FieldRegistry


class AccessScope(str, enum.Enum):
    """Visibility policies applied to list queries."""

    ALL = "all"
    OWNED_ONLY = "owned_only"


def resolve_access_scope(role: UserRole) -> AccessScope:
    """Administrators see every row; every other role only sees its own."""

    if role is UserRole.ADMIN:
        return AccessScope.ALL
    return AccessScope.OWNED_ONLY


def access_predicate(
    registry: FieldRegistry, *, role: UserRole, caller_id: int
) -> ColumnElement[bool]:
    """Return the visibility clause for ``registry`` rows as seen by the caller."""

    if resolve_access_scope(role) is AccessScope.ALL:
        return true()
    return registry.owner_column == caller_id


def can_access(role: UserRole, caller_id: int, owner_id: int | None) -> bool:
    """Check a single, already loaded row against the caller's scope."""

    if resolve_access_scope(role) is AccessScope.ALL:
        return True
    return owner_id is not None and owner_id == caller_id
