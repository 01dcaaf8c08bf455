"""Service layer encapsulating business logic for API routers."""

from .auth import AuthService
from .dashboard import DashboardService
from .inspections import InspectionService
from .pumps import PumpService
from .query_builder import QueryBuilderService

__all__ = [
    "AuthService",
    "DashboardService",
    "InspectionService",
    "PumpService",
    "QueryBuilderService",
]
