"""Schemas describing the dashboard statistics payload."""

from __future__ import annotations

from datetime import datetime

from ..models.inspection import InspectionStatus
from ..models.pump import PumpType
from .common import ApiModel


class DashboardSummary(ApiModel):
    total_pumps: int
    operational_pumps: int
    non_operational_pumps: int
    total_inspections: int
    recent_inspections: int


class PumpTypeCount(ApiModel):
    type: PumpType
    count: int


class InspectionStatusCount(ApiModel):
    status: InspectionStatus
    count: int


class AreaCount(ApiModel):
    area: str
    count: int


class RecentPressureReading(ApiModel):
    date: datetime
    pressure: float
    pump_name: str


class DashboardStats(ApiModel):
    """Aggregates over the pumps and inspections visible to the caller."""

    summary: DashboardSummary
    pump_types: list[PumpTypeCount]
    inspection_statuses: list[InspectionStatusCount]
    area_distribution: list[AreaCount]
    recent_pressure_readings: list[RecentPressureReading]
