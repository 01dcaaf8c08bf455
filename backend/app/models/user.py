"""SQLAlchemy models for application users and their refresh tokens."""

from __future__ import annotations

import enum

from sqlalchemy import (
    Column,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import relationship

from ..database import Base


class UserRole(str, enum.Enum):
    """Roles recognised by the authorization layer."""

    ADMIN = "Admin"
    MANAGER = "Manager"
    TECHNICIAN = "Technician"
    INSPECTOR = "Inspector"


USER_ROLE_ENUM = SAEnum(
    UserRole,
    name="user_role_enum",
    values_callable=lambda enum_cls: [member.value for member in enum_cls],
    native_enum=False,
    validate_strings=True,
)


class User(Base):
    """An account able to authenticate against the API."""

    __tablename__ = "users"

    id = Column("user_id", Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(USER_ROLE_ENUM, nullable=False, default=UserRole.MANAGER)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    pumps = relationship("Pump", back_populates="owner")
    inspections = relationship("PumpInspection", back_populates="inspector")
    refresh_tokens = relationship(
        "RefreshToken",
        back_populates="user",
        cascade="all, delete-orphan",
    )


class RefreshToken(Base):
    """Opaque refresh token issued alongside an access token."""

    __tablename__ = "refresh_tokens"

    id = Column("refresh_token_id", Integer, primary_key=True, autoincrement=True)
    token = Column(String(128), nullable=False, unique=True)
    user_id = Column(
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="refresh_tokens")


Index("refresh_tokens_user_idx", RefreshToken.user_id)
