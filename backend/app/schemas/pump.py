"""Pydantic schemas for pump resources."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from ..models.pump import PumpType
from .common import ApiModel, PaginatedResponse


class PumpBase(ApiModel):
    """Attributes shared by create and read operations."""

    name: str = Field(..., min_length=1, max_length=100)
    type: PumpType = PumpType.CENTRIFUGAL
    area: str = Field(..., min_length=1, max_length=100)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    flow_rate: float = Field(..., ge=0)
    offset: float = 0
    current_pressure: float = Field(..., ge=0)
    min_pressure: float = Field(..., ge=0)
    max_pressure: float = Field(..., ge=0)


class PumpCreate(PumpBase):
    """Schema used when registering a pump."""

    @model_validator(mode="after")
    def check_pressure_range(self) -> "PumpCreate":
        if self.min_pressure > self.max_pressure:
            raise ValueError("minPressure cannot be greater than maxPressure")
        return self


class PumpUpdate(ApiModel):
    """Schema used when updating a pump; omitted fields keep their value."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    type: Optional[PumpType] = None
    area: Optional[str] = Field(default=None, min_length=1, max_length=100)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    flow_rate: Optional[float] = Field(default=None, ge=0)
    offset: Optional[float] = None
    current_pressure: Optional[float] = Field(default=None, ge=0)
    min_pressure: Optional[float] = Field(default=None, ge=0)
    max_pressure: Optional[float] = Field(default=None, ge=0)


class PumpRead(PumpBase):
    """Schema representing a stored pump."""

    id: int
    user_id: int
    last_updated: datetime
    is_operational: bool


PumpListResponse = PaginatedResponse[PumpRead]
