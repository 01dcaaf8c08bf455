"""Authentication endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..security import CallerIdentity, get_current_user
from ..services import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=schemas.TokenResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: schemas.RegisterRequest, db: Session = Depends(get_db)
) -> schemas.TokenResponse:
    """Create a Manager account and sign it in."""
    return AuthService.register(db, payload)


@router.post("/login", response_model=schemas.TokenResponse)
def login(payload: schemas.LoginRequest, db: Session = Depends(get_db)) -> schemas.TokenResponse:
    return AuthService.login(db, payload)


@router.post("/refresh", response_model=schemas.TokenResponse)
def refresh(
    payload: schemas.RefreshTokenRequest, db: Session = Depends(get_db)
) -> schemas.TokenResponse:
    """Rotate a refresh token."""
    return AuthService.refresh(db, payload)


@router.post("/revoke", response_model=schemas.MessageResponse)
def revoke(
    payload: schemas.RefreshTokenRequest,
    caller: CallerIdentity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> schemas.MessageResponse:
    AuthService.revoke(db, payload, caller)
    return schemas.MessageResponse(message="Refresh token revoked")
