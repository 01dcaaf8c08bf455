from datetime import datetime, timedelta, timezone

import pytest

from backend.app import models
from backend.app.errors import InvalidTokenError, ValidationError
from backend.app.security import (
    SecurityConfigurationError,
    _decode_jwt,
    _encode_jwt,
    _load_jwt_key,
    create_access_token,
    generate_password_hash,
    validate_password_strength,
    verify_password,
)


def test_password_hash_round_trip():
    stored = generate_password_hash("Pump-Secret1", iterations=1_000)

    assert stored.startswith("1000$")
    assert verify_password("Pump-Secret1", stored)
    assert not verify_password("pump-secret1", stored)


def test_verify_password_rejects_corrupted_hash():
    with pytest.raises(SecurityConfigurationError):
        verify_password("anything", "not-a-hash")


def test_password_strength_lists_every_broken_rule():
    with pytest.raises(ValidationError) as excinfo:
        validate_password_strength("abc")

    assert excinfo.value.errors["password"] == [
        "Password must be at least 8 characters long.",
        "Password must contain at least one uppercase letter.",
        "Password must contain at least one number.",
        "Password must contain at least one special character.",
    ]


def test_strong_password_passes():
    validate_password_strength("Str0ng!Pass")


def test_access_token_carries_identity_claims():
    user = models.User(id=7, username="claims", role=models.UserRole.TECHNICIAN)

    payload = _decode_jwt(create_access_token(user), _load_jwt_key())

    assert payload["sub"] == "7"
    assert payload["name"] == "claims"
    assert payload["role"] == "Technician"
    assert payload["exp"] > payload["iat"]


def test_tampered_token_is_rejected():
    user = models.User(id=7, username="claims", role=models.UserRole.TECHNICIAN)
    header, payload, signature = create_access_token(user).split(".")
    forged = _encode_jwt({"sub": "1", "exp": 4102444800}, b"another-key").split(".")[1]

    with pytest.raises(InvalidTokenError):
        _decode_jwt(f"{header}.{forged}.{signature}", _load_jwt_key())


def test_expired_token_is_rejected():
    expired_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    token = _encode_jwt({"sub": "1", "exp": int(expired_at.timestamp())}, _load_jwt_key())

    with pytest.raises(InvalidTokenError) as excinfo:
        _decode_jwt(token, _load_jwt_key())

    assert excinfo.value.message == "Token expired"
