"""SQLAlchemy model definitions for pumps."""

from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
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


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PumpType(str, enum.Enum):
    """Mechanical families of pumps tracked in the fleet."""

    CENTRIFUGAL = "Centrifugal"
    SUBMERSIBLE = "Submersible"
    DIAPHRAGM = "Diaphragm"
    PISTON = "Piston"
    GEAR = "Gear"


PUMP_TYPE_ENUM = SAEnum(
    PumpType,
    name="pump_type_enum",
    values_callable=lambda enum_cls: [member.value for member in enum_cls],
    native_enum=False,
    validate_strings=True,
)


class Pump(Base):
    """A pump installed in the field and owned by a user."""

    __tablename__ = "pumps"
    __table_args__ = (
        CheckConstraint("min_pressure <= max_pressure", name="ck_pumps_pressure_range"),
    )

    id = Column("pump_id", Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    type = Column(PUMP_TYPE_ENUM, nullable=False, default=PumpType.CENTRIFUGAL)
    area = Column(String(100), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    flow_rate = Column(Float, nullable=False)
    offset = Column(Float, nullable=False, default=0)
    current_pressure = Column(Float, nullable=False)
    min_pressure = Column(Float, nullable=False)
    max_pressure = Column(Float, nullable=False)
    last_updated = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    user_id = Column(
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    )

    owner = relationship("User", back_populates="pumps")
    inspections = relationship(
        "PumpInspection",
        back_populates="pump",
        cascade="all, delete-orphan",
    )

    @property
    def is_operational(self) -> bool:
        """Return ``True`` when the current pressure is inside the allowed band."""

        return self.min_pressure <= self.current_pressure <= self.max_pressure


Index("pumps_user_idx", Pump.user_id)
Index("pumps_area_idx", Pump.area)
