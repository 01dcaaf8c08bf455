"""Routers package."""

from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .inspections import router as inspections_router
from .pumps import router as pumps_router

__all__ = [
    "auth_router",
    "dashboard_router",
    "inspections_router",
    "pumps_router",
]
