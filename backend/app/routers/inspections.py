"""Router exposing pump inspections."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..security import CallerIdentity, get_current_user
from ..services import InspectionService
from ..services.inspections import DEFAULT_HISTORY_DAYS
from .query_params import get_query_parameters

router = APIRouter()


@router.get("", response_model=schemas.InspectionListResponse)
def list_inspections(
    parameters: schemas.QueryParameters = Depends(get_query_parameters),
    caller: CallerIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.InspectionListResponse:
    """Return the inspections performed by the caller (all of them for admins)."""
    page = InspectionService.list_inspections(db, caller, parameters)
    return schemas.InspectionListResponse.from_page(page)


@router.get("/pump/{pump_id}", response_model=list[schemas.InspectionRead])
def list_pump_inspections(
    pump_id: int,
    caller: CallerIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[schemas.InspectionRead]:
    return list(InspectionService.list_for_pump(db, pump_id, caller))


@router.get("/pump/{pump_id}/pressure-history", response_model=list[schemas.PressureReading])
def get_pressure_history(
    pump_id: int,
    days: int = Query(DEFAULT_HISTORY_DAYS, ge=1, le=365, description="How many days back to look"),
    caller: CallerIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[schemas.PressureReading]:
    return InspectionService.pressure_history(db, pump_id, caller, days=days)


@router.post("", response_model=schemas.InspectionRead, status_code=status.HTTP_201_CREATED)
def create_inspection(
    inspection_in: schemas.InspectionCreate,
    caller: CallerIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.InspectionRead:
    """Record a reading taken by the caller."""
    return InspectionService.create_inspection(db, inspection_in, caller)
