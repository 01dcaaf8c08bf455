"""Expose Pydantic schemas for convenient imports."""

from .auth import LoginRequest, RefreshTokenRequest, RegisterRequest, TokenResponse
from .common import (
    ApiModel,
    ErrorResponse,
    MessageResponse,
    PaginatedResponse,
    QueryParameters,
)
from .dashboard import (
    AreaCount,
    DashboardStats,
    DashboardSummary,
    InspectionStatusCount,
    PumpTypeCount,
    RecentPressureReading,
)
from .inspection import (
    InspectionCreate,
    InspectionListResponse,
    InspectionRead,
    PressureReading,
)
from .pump import PumpBase, PumpCreate, PumpListResponse, PumpRead, PumpUpdate

__all__ = [
    "ApiModel",
    "AreaCount",
    "DashboardStats",
    "DashboardSummary",
    "ErrorResponse",
    "InspectionCreate",
    "InspectionListResponse",
    "InspectionRead",
    "InspectionStatusCount",
    "LoginRequest",
    "MessageResponse",
    "PaginatedResponse",
    "PressureReading",
    "PumpBase",
    "PumpCreate",
    "PumpListResponse",
    "PumpRead",
    "PumpTypeCount",
    "PumpUpdate",
    "QueryParameters",
    "RecentPressureReading",
    "RefreshTokenRequest",
    "RegisterRequest",
    "TokenResponse",
]
