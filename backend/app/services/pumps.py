"""Business logic for pumps."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from .. import models, schemas
from ..errors import AccessDeniedError, NotFoundError, ValidationError
from ..query import PUMP_FIELDS, PagedResult, can_access
from ..security import CallerIdentity
from .query_builder import QueryBuilderService


class PumpService:
    """Encapsulates CRUD operations for pumps."""

    @staticmethod
    def list_pumps(
        db: Session,
        caller: CallerIdentity,
        parameters: schemas.QueryParameters,
    ) -> PagedResult[schemas.PumpRead]:
        page = QueryBuilderService.get_paged_result(
            db.query(models.Pump), PUMP_FIELDS, caller, parameters
        )
        return page.map(schemas.PumpRead.model_validate)

    @staticmethod
    def get_pump(db: Session, pump_id: int) -> Optional[models.Pump]:
        return db.get(models.Pump, pump_id)

    @staticmethod
    def get_pump_for_caller(
        db: Session, pump_id: int, caller: CallerIdentity, *, action: str = "view"
    ) -> models.Pump:
        """Return the pump or raise when it is missing or outside the caller's scope."""

        pump = PumpService.get_pump(db, pump_id)
        if pump is None:
            raise NotFoundError("Pump not found")
        if not can_access(caller.role, caller.user_id, pump.user_id):
            raise AccessDeniedError(f"Access denied. You can only {action} your own pumps.")
        return pump

    @staticmethod
    def create_pump(
        db: Session, data: schemas.PumpCreate, caller: CallerIdentity
    ) -> models.Pump:
        pump = models.Pump(
            **data.model_dump(),
            user_id=caller.user_id,
            last_updated=datetime.now(timezone.utc),
        )
        db.add(pump)
        db.commit()
        db.refresh(pump)
        return pump

    @staticmethod
    def update_pump(
        db: Session,
        pump_id: int,
        data: schemas.PumpUpdate,
        caller: CallerIdentity,
    ) -> models.Pump:
        pump = PumpService.get_pump_for_caller(db, pump_id, caller, action="update")
        changes = data.model_dump(exclude_unset=True, exclude_none=True)

        min_pressure = changes.get("min_pressure", pump.min_pressure)
        max_pressure = changes.get("max_pressure", pump.max_pressure)
        if min_pressure > max_pressure:
            raise ValidationError(
                "minPressure cannot be greater than maxPressure",
                errors={"minPressure": ["Must not exceed maxPressure."]},
            )

        for field, value in changes.items():
            setattr(pump, field, value)
        pump.last_updated = datetime.now(timezone.utc)
        db.commit()
        db.refresh(pump)
        return pump

    @staticmethod
    def delete_pump(db: Session, pump_id: int) -> None:
        pump = PumpService.get_pump(db, pump_id)
        if pump is None:
            raise NotFoundError("Pump not found")
        db.delete(pump)
        db.commit()
