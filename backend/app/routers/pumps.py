"""Router containing CRUD operations for pumps."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..models import UserRole
from ..security import CallerIdentity, get_current_user, require_roles
from ..services import PumpService
from .query_params import get_query_parameters

router = APIRouter()


@router.get("", response_model=schemas.PumpListResponse)
def list_pumps(
    parameters: schemas.QueryParameters = Depends(get_query_parameters),
    caller: CallerIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.PumpListResponse:
    """Return the pumps visible to the caller, one page at a time."""
    page = PumpService.list_pumps(db, caller, parameters)
    return schemas.PumpListResponse.from_page(page)


@router.get("/{pump_id}", response_model=schemas.PumpRead)
def get_pump(
    pump_id: int,
    caller: CallerIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.PumpRead:
    return PumpService.get_pump_for_caller(db, pump_id, caller)


@router.post("", response_model=schemas.PumpRead, status_code=status.HTTP_201_CREATED)
def create_pump(
    pump_in: schemas.PumpCreate,
    caller: CallerIdentity = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
    db: Session = Depends(get_db),
) -> schemas.PumpRead:
    """Register a pump owned by the caller."""
    return PumpService.create_pump(db, pump_in, caller)


@router.put("/{pump_id}", response_model=schemas.PumpRead)
def update_pump(
    pump_id: int,
    pump_in: schemas.PumpUpdate,
    caller: CallerIdentity = Depends(
        require_roles(UserRole.ADMIN, UserRole.MANAGER, UserRole.TECHNICIAN)
    ),
    db: Session = Depends(get_db),
) -> schemas.PumpRead:
    return PumpService.update_pump(db, pump_id, pump_in, caller)


@router.delete(
    "/{pump_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_roles(UserRole.ADMIN))],
)
def delete_pump(pump_id: int, db: Session = Depends(get_db)) -> None:
    PumpService.delete_pump(db, pump_id)
