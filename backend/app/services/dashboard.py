"""Aggregated statistics for the dashboard."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models, schemas
from ..query import INSPECTION_FIELDS, PUMP_FIELDS, access_predicate
from ..security import CallerIdentity

RECENT_WINDOW_DAYS = 7


class DashboardService:
    """Counts and distributions over the rows visible to the caller."""

    @staticmethod
    def stats(db: Session, caller: CallerIdentity) -> schemas.DashboardStats:
        pump_scope = access_predicate(PUMP_FIELDS, role=caller.role, caller_id=caller.user_id)
        inspection_scope = access_predicate(
            INSPECTION_FIELDS, role=caller.role, caller_id=caller.user_id
        )
        recent_cutoff = datetime.now(timezone.utc) - timedelta(days=RECENT_WINDOW_DAYS)
        Pump = models.Pump
        Inspection = models.PumpInspection

        total_pumps = db.query(func.count(Pump.id)).filter(pump_scope).scalar() or 0
        operational_pumps = (
            db.query(func.count(Pump.id))
            .filter(pump_scope)
            .filter(Pump.current_pressure.between(Pump.min_pressure, Pump.max_pressure))
            .scalar()
            or 0
        )
        total_inspections = (
            db.query(func.count(Inspection.id)).filter(inspection_scope).scalar() or 0
        )
        recent_inspections = (
            db.query(func.count(Inspection.id))
            .filter(inspection_scope, Inspection.inspection_date >= recent_cutoff)
            .scalar()
            or 0
        )

        pump_types = (
            db.query(Pump.type, func.count(Pump.id))
            .filter(pump_scope)
            .group_by(Pump.type)
            .order_by(Pump.type)
            .all()
        )
        statuses = (
            db.query(Inspection.status, func.count(Inspection.id))
            .filter(inspection_scope)
            .group_by(Inspection.status)
            .order_by(Inspection.status)
            .all()
        )
        areas = (
            db.query(Pump.area, func.count(Pump.id))
            .filter(pump_scope)
            .group_by(Pump.area)
            .order_by(Pump.area)
            .all()
        )
        readings = (
            db.query(Inspection.inspection_date, Inspection.pressure_reading, Pump.name)
            .join(Pump, Inspection.pump_id == Pump.id)
            .filter(inspection_scope, Inspection.inspection_date >= recent_cutoff)
            .order_by(Inspection.inspection_date.asc())
            .all()
        )

        return schemas.DashboardStats(
            summary=schemas.DashboardSummary(
                total_pumps=total_pumps,
                operational_pumps=operational_pumps,
                non_operational_pumps=total_pumps - operational_pumps,
                total_inspections=total_inspections,
                recent_inspections=recent_inspections,
            ),
            pump_types=[
                schemas.PumpTypeCount(type=pump_type, count=count)
                for pump_type, count in pump_types
            ],
            inspection_statuses=[
                schemas.InspectionStatusCount(status=status, count=count)
                for status, count in statuses
            ],
            area_distribution=[
                schemas.AreaCount(area=area, count=count) for area, count in areas
            ],
            recent_pressure_readings=[
                schemas.RecentPressureReading(date=date, pressure=pressure, pump_name=name)
                for date, pressure, name in readings
            ],
        )
