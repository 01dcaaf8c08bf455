"""Router exposing aggregated dashboard statistics."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..security import CallerIdentity, get_current_user
from ..services import DashboardService

router = APIRouter()


@router.get("/stats", response_model=schemas.DashboardStats)
def get_dashboard_stats(
    caller: CallerIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.DashboardStats:
    return DashboardService.stats(db, caller)
