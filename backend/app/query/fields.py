"""Field registries for the entity kinds exposed through list endpoints."""

from __future__ import annotations

from ..models import InspectionStatus, Pump, PumpInspection, PumpType
from .registry import FieldRegistry, FieldSpec, FieldType

PUMP_FIELDS = FieldRegistry(
    name="pumps",
    owner_column=Pump.user_id,
    tie_breaker=Pump.id,
    sortable={
        "name": Pump.name,
        "type": Pump.type,
        "area": Pump.area,
        "lat": Pump.latitude,
        "lng": Pump.longitude,
        "flow": Pump.flow_rate,
        "offset": Pump.offset,
        "current": Pump.current_pressure,
        "min": Pump.min_pressure,
        "max": Pump.max_pressure,
        "lastUpdated": Pump.last_updated,
    },
    filterable={
        "name": FieldSpec(Pump.name),
        "type": FieldSpec(Pump.type, FieldType.ENUM, PumpType),
        "area": FieldSpec(Pump.area),
    },
)

INSPECTION_FIELDS = FieldRegistry(
    name="inspections",
    owner_column=PumpInspection.inspector_id,
    tie_breaker=PumpInspection.id,
    sortable={
        "date": PumpInspection.inspection_date,
        "pressure": PumpInspection.pressure_reading,
        "flow": PumpInspection.flow_rate_reading,
        "status": PumpInspection.status,
        "operational": PumpInspection.is_operational,
        "pumpId": PumpInspection.pump_id,
    },
    filterable={
        "notes": FieldSpec(PumpInspection.notes),
        "status": FieldSpec(PumpInspection.status, FieldType.ENUM, InspectionStatus),
        "operational": FieldSpec(PumpInspection.is_operational, FieldType.BOOL),
        "pumpId": FieldSpec(PumpInspection.pump_id, FieldType.NUMERIC),
        "date": FieldSpec(PumpInspection.inspection_date, FieldType.DATE),
    },
)
