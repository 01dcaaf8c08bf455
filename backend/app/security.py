"""Password hashing, access tokens and the caller identity dependencies."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import os
import re
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Callable

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from .database import get_db
from .errors import AccessDeniedError, InvalidTokenError, UnknownCallerError, ValidationError
from .models import User, UserRole

JWT_SECRET_ENV = "JWT_SECRET"
ACCESS_TOKEN_EXPIRE_MINUTES_ENV = "ACCESS_TOKEN_EXPIRE_MINUTES"
REFRESH_TOKEN_EXPIRE_DAYS_ENV = "REFRESH_TOKEN_EXPIRE_DAYS"

PBKDF2_DEFAULT_ITERATIONS = 390_000
DEFAULT_ACCESS_TOKEN_MINUTES = 30
DEFAULT_REFRESH_TOKEN_DAYS = 7
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


class SecurityConfigurationError(RuntimeError):
    """Raised when mandatory security settings are missing or invalid."""


def _read_env_var(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise SecurityConfigurationError(f"Environment variable '{name}' is required")
    return value


def _read_positive_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise SecurityConfigurationError(f"{name} must be an integer") from exc
    if value <= 0:
        raise SecurityConfigurationError(f"{name} must be positive")
    return value


def generate_password_hash(password: str, *, iterations: int = PBKDF2_DEFAULT_ITERATIONS) -> str:
    """Return a PBKDF2-based password hash string."""

    if not password:
        raise ValueError("password must not be empty")
    salt = secrets.token_bytes(16)
    derived = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    components = (
        str(iterations),
        base64.urlsafe_b64encode(salt).decode("ascii"),
        base64.urlsafe_b64encode(derived).decode("ascii"),
    )
    return "$".join(components)


def verify_password(password: str, stored_hash: str) -> bool:
    """Verify a password against a stored PBKDF2 hash."""

    try:
        iterations_str, salt_b64, hash_b64 = stored_hash.split("$")
        iterations = int(iterations_str)
        salt = base64.urlsafe_b64decode(salt_b64)
        digest = base64.urlsafe_b64decode(hash_b64)
    except (ValueError, binascii.Error) as exc:
        raise SecurityConfigurationError("Stored password hash is invalid") from exc
    candidate = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return hmac.compare_digest(candidate, digest)


_PASSWORD_RULES: tuple[tuple[str, str], ...] = (
    (r"[A-Z]", "Password must contain at least one uppercase letter."),
    (r"[a-z]", "Password must contain at least one lowercase letter."),
    (r"\d", "Password must contain at least one number."),
    (r"[^A-Za-z0-9\s]", "Password must contain at least one special character."),
)


def validate_password_strength(password: str) -> None:
    """Raise :class:`ValidationError` listing every rule the password breaks."""

    problems: list[str] = []
    if not password or not password.strip():
        problems.append("Password cannot be empty.")
    else:
        if len(password) < PASSWORD_MIN_LENGTH:
            problems.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long.")
        if len(password) > PASSWORD_MAX_LENGTH:
            problems.append(f"Password cannot exceed {PASSWORD_MAX_LENGTH} characters.")
        problems.extend(message for pattern, message in _PASSWORD_RULES if not re.search(pattern, password))
    if problems:
        raise ValidationError(problems[0], errors={"password": problems})


@lru_cache(maxsize=1)
def _load_jwt_key() -> bytes:
    raw_secret = _read_env_var(JWT_SECRET_ENV)
    try:
        return base64.urlsafe_b64decode(raw_secret)
    except (ValueError, binascii.Error):
        return raw_secret.encode("utf-8")


def access_token_lifetime() -> timedelta:
    return timedelta(
        minutes=_read_positive_int_env(ACCESS_TOKEN_EXPIRE_MINUTES_ENV, DEFAULT_ACCESS_TOKEN_MINUTES)
    )


def refresh_token_lifetime() -> timedelta:
    return timedelta(
        days=_read_positive_int_env(REFRESH_TOKEN_EXPIRE_DAYS_ENV, DEFAULT_REFRESH_TOKEN_DAYS)
    )


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _encode_jwt(payload: dict[str, Any], key: bytes) -> str:
    header = {"typ": "JWT", "alg": "HS256"}
    header_b64 = _b64url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    signature = hmac.new(key, signing_input, hashlib.sha256).digest()
    return f"{header_b64}.{payload_b64}.{_b64url_encode(signature)}"


def _decode_jwt(token: str, key: bytes) -> dict[str, Any]:
    try:
        header_b64, payload_b64, signature_b64 = token.split(".")
        signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
        signature = _b64url_decode(signature_b64)
    except (ValueError, binascii.Error) as exc:
        raise InvalidTokenError("Invalid token") from exc

    expected_signature = hmac.new(key, signing_input, hashlib.sha256).digest()
    if not hmac.compare_digest(signature, expected_signature):
        raise InvalidTokenError("Invalid token")

    try:
        payload_data = json.loads(_b64url_decode(payload_b64).decode("utf-8"))
        exp = int(payload_data["exp"])
    except (ValueError, KeyError, TypeError, binascii.Error) as exc:
        raise InvalidTokenError("Invalid token") from exc
    if datetime.now(timezone.utc) >= datetime.fromtimestamp(exp, tz=timezone.utc):
        raise InvalidTokenError("Token expired")
    return payload_data


def create_access_token(user: User) -> str:
    issued_at = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": str(user.id),
        "name": user.username,
        "role": UserRole(user.role).value,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + access_token_lifetime()).timestamp()),
    }
    return _encode_jwt(payload, _load_jwt_key())


def generate_refresh_token() -> str:
    return secrets.token_urlsafe(48)


@dataclass(frozen=True)
class CallerIdentity:
    """The authenticated user a request acts on behalf of."""

    user_id: int
    username: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> CallerIdentity:
    """Resolve the bearer token to a stored user.

    The role is read from the database, not the token, so role changes apply
    to tokens that are already issued.
    """

    payload = _decode_jwt(token, _load_jwt_key())
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError) as exc:
        raise InvalidTokenError("Invalid token") from exc

    user = db.get(User, user_id)
    if user is None:
        raise UnknownCallerError("User not found")
    return CallerIdentity(user_id=user.id, username=user.username, role=UserRole(user.role))


def require_roles(*roles: UserRole) -> Callable[..., CallerIdentity]:
    """Build a dependency that admits only callers holding one of ``roles``."""

    allowed = frozenset(roles)

    def _dependency(caller: CallerIdentity = Depends(get_current_user)) -> CallerIdentity:
        if caller.role not in allowed:
            raise AccessDeniedError(
                "Access denied. Requires one of the roles: "
                + ", ".join(role.value for role in roles)
            )
        return caller

    return _dependency
