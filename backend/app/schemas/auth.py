"""Pydantic schemas for authentication endpoints."""

from __future__ import annotations

from pydantic import Field

from ..models.user import UserRole
from .common import ApiModel


class RegisterRequest(ApiModel):
    """Payload required to create an account."""

    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)


class LoginRequest(ApiModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RefreshTokenRequest(ApiModel):
    refresh_token: str = Field(..., min_length=1)


class TokenResponse(ApiModel):
    """Tokens returned after a successful login, registration or refresh."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    username: str
    role: UserRole
