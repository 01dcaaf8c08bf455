"""Business logic for pump inspections."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable

from sqlalchemy.orm import Session, selectinload

from .. import models, schemas
from ..errors import NotFoundError
from ..query import INSPECTION_FIELDS, PagedResult
from ..security import CallerIdentity
from .pumps import PumpService
from .query_builder import QueryBuilderService

DEFAULT_HISTORY_DAYS = 30


class InspectionService:
    """Recording and listing inspections."""

    @staticmethod
    def list_inspections(
        db: Session,
        caller: CallerIdentity,
        parameters: schemas.QueryParameters,
    ) -> PagedResult[schemas.InspectionRead]:
        query = db.query(models.PumpInspection).options(
            selectinload(models.PumpInspection.inspector)
        )
        page = QueryBuilderService.get_paged_result(query, INSPECTION_FIELDS, caller, parameters)
        return page.map(schemas.InspectionRead.model_validate)

    @staticmethod
    def list_for_pump(
        db: Session, pump_id: int, caller: CallerIdentity
    ) -> Iterable[models.PumpInspection]:
        """Inspections of a pump the caller can see, newest first."""

        PumpService.get_pump_for_caller(db, pump_id, caller)
        return (
            db.query(models.PumpInspection)
            .options(selectinload(models.PumpInspection.inspector))
            .filter(models.PumpInspection.pump_id == pump_id)
            .order_by(
                models.PumpInspection.inspection_date.desc(),
                models.PumpInspection.id.desc(),
            )
            .all()
        )

    @staticmethod
    def pressure_history(
        db: Session,
        pump_id: int,
        caller: CallerIdentity,
        *,
        days: int = DEFAULT_HISTORY_DAYS,
    ) -> list[schemas.PressureReading]:
        """Readings taken during the last ``days`` days, oldest first."""

        PumpService.get_pump_for_caller(db, pump_id, caller)
        cutoff = datetime.now(timezone.utc) - timedelta(days=days)
        inspections = (
            db.query(models.PumpInspection)
            .filter(
                models.PumpInspection.pump_id == pump_id,
                models.PumpInspection.inspection_date >= cutoff,
            )
            .order_by(models.PumpInspection.inspection_date.asc())
            .all()
        )
        return [
            schemas.PressureReading(
                date=inspection.inspection_date,
                pressure=inspection.pressure_reading,
                flow_rate=inspection.flow_rate_reading,
                is_operational=inspection.is_operational,
            )
            for inspection in inspections
        ]

    @staticmethod
    def create_inspection(
        db: Session, data: schemas.InspectionCreate, caller: CallerIdentity
    ) -> models.PumpInspection:
        if PumpService.get_pump(db, data.pump_id) is None:
            raise NotFoundError("Pump not found")

        inspection = models.PumpInspection(
            **data.model_dump(),
            inspector_id=caller.user_id,
            inspection_date=datetime.now(timezone.utc),
            status=models.InspectionStatus.COMPLETED,
        )
        db.add(inspection)
        db.commit()
        db.refresh(inspection)
        return inspection
