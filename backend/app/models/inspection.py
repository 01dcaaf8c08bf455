"""SQLAlchemy model definitions for pump inspections."""

from __future__ import annotations

import enum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import relationship

from ..database import Base


class InspectionStatus(str, enum.Enum):
    """Lifecycle states of an inspection."""

    SCHEDULED = "Scheduled"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    FAILED = "Failed"


INSPECTION_STATUS_ENUM = SAEnum(
    InspectionStatus,
    name="inspection_status_enum",
    values_callable=lambda enum_cls: [member.value for member in enum_cls],
    native_enum=False,
    validate_strings=True,
)


class PumpInspection(Base):
    """A pressure and flow reading taken by an inspector on a pump."""

    __tablename__ = "pump_inspections"

    id = Column("inspection_id", Integer, primary_key=True, autoincrement=True)
    inspection_date = Column(DateTime(timezone=True), nullable=False)
    notes = Column(String(500), nullable=True)
    pressure_reading = Column(Float, nullable=False)
    flow_rate_reading = Column(Float, nullable=False)
    status = Column(INSPECTION_STATUS_ENUM, nullable=False, default=InspectionStatus.COMPLETED)
    is_operational = Column(Boolean, nullable=False)
    pump_id = Column(
        Integer,
        ForeignKey("pumps.pump_id", ondelete="CASCADE"),
        nullable=False,
    )
    inspector_id = Column(
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    )

    pump = relationship("Pump", back_populates="inspections")
    inspector = relationship("User", back_populates="inspections")

    @property
    def inspector_name(self) -> str:
        return self.inspector.username if self.inspector is not None else "Unknown"


Index("pump_inspections_pump_date_idx", PumpInspection.pump_id, PumpInspection.inspection_date)
Index("pump_inspections_inspector_idx", PumpInspection.inspector_id)
