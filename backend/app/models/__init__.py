"""Expose SQLAlchemy models for convenient imports."""

from .inspection import InspectionStatus, PumpInspection
from .pump import Pump, PumpType
from .user import RefreshToken, User, UserRole

__all__ = [
    "InspectionStatus",
    "Pump",
    "PumpInspection",
    "PumpType",
    "RefreshToken",
    "User",
    "UserRole",
]
