"""Account registration, login and refresh-token rotation."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models, schemas
from ..errors import ConflictError, InvalidCredentialsError, InvalidTokenError, NotFoundError
from ..security import (
    CallerIdentity,
    access_token_lifetime,
    create_access_token,
    generate_password_hash,
    generate_refresh_token,
    refresh_token_lifetime,
    validate_password_strength,
    verify_password,
)

LOGGER = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AuthService:
    """Issues and revokes the tokens that identify API callers."""

    @staticmethod
    def _find_user(db: Session, username: str) -> Optional[models.User]:
        normalized = username.strip().lower()
        return (
            db.query(models.User)
            .filter(func.lower(models.User.username) == normalized)
            .one_or_none()
        )

    @staticmethod
    def _issue_tokens(db: Session, user: models.User) -> schemas.TokenResponse:
        refresh = models.RefreshToken(
            token=generate_refresh_token(),
            user_id=user.id,
            expires_at=datetime.now(timezone.utc) + refresh_token_lifetime(),
        )
        db.add(refresh)
        db.commit()
        return schemas.TokenResponse(
            access_token=create_access_token(user),
            refresh_token=refresh.token,
            expires_in=int(access_token_lifetime().total_seconds()),
            username=user.username,
            role=user.role,
        )

    @staticmethod
    def register(db: Session, payload: schemas.RegisterRequest) -> schemas.TokenResponse:
        username = payload.username.strip()
        validate_password_strength(payload.password)
        if AuthService._find_user(db, username) is not None:
            raise ConflictError("User already exists")

        user = models.User(
            username=username,
            password_hash=generate_password_hash(payload.password),
            role=models.UserRole.MANAGER,
        )
        db.add(user)
        db.flush()
        LOGGER.info("Registered user %s", username)
        return AuthService._issue_tokens(db, user)

    @staticmethod
    def login(db: Session, payload: schemas.LoginRequest) -> schemas.TokenResponse:
        user = AuthService._find_user(db, payload.username)
        if user is None or not verify_password(payload.password, user.password_hash):
            LOGGER.info("Rejected login for %s", payload.username.strip())
            raise InvalidCredentialsError("Invalid username or password")
        return AuthService._issue_tokens(db, user)

    @staticmethod
    def _active_token(db: Session, token: str) -> Optional[models.RefreshToken]:
        stored = (
            db.query(models.RefreshToken)
            .filter(models.RefreshToken.token == token)
            .one_or_none()
        )
        if stored is None or stored.revoked_at is not None:
            return None
        if _as_utc(stored.expires_at) <= datetime.now(timezone.utc):
            return None
        return stored

    @staticmethod
    def refresh(db: Session, payload: schemas.RefreshTokenRequest) -> schemas.TokenResponse:
        """Exchange an active refresh token for a new pair; the old one is revoked."""

        stored = AuthService._active_token(db, payload.refresh_token)
        if stored is None:
            raise InvalidTokenError("Invalid or expired refresh token")
        stored.revoked_at = datetime.now(timezone.utc)
        return AuthService._issue_tokens(db, stored.user)

    @staticmethod
    def revoke(
        db: Session, payload: schemas.RefreshTokenRequest, caller: CallerIdentity
    ) -> None:
        stored = AuthService._active_token(db, payload.refresh_token)
        if stored is None or (stored.user_id != caller.user_id and not caller.is_admin):
            raise NotFoundError("Refresh token not found")
        stored.revoked_at = datetime.now(timezone.utc)
        db.commit()
