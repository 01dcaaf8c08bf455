"""Pydantic schemas for pump inspections."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from ..models.inspection import InspectionStatus
from .common import ApiModel, PaginatedResponse


class InspectionCreate(ApiModel):
    """Reading submitted by the inspector; date and status are set server-side."""

    pump_id: int = Field(..., ge=1)
    pressure_reading: float = Field(..., ge=0)
    flow_rate_reading: float = Field(..., ge=0)
    notes: Optional[str] = Field(default=None, max_length=500)
    is_operational: bool


class InspectionRead(ApiModel):
    id: int
    inspection_date: datetime
    notes: Optional[str] = None
    pressure_reading: float
    flow_rate_reading: float
    status: InspectionStatus
    is_operational: bool
    pump_id: int
    inspector_id: int
    inspector_name: str


class PressureReading(ApiModel):
    """A point of a pump's pressure history."""

    date: datetime
    pressure: float
    flow_rate: float
    is_operational: bool


InspectionListResponse = PaginatedResponse[InspectionRead]
