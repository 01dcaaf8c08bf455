from __future__ import annotations

from datetime import datetime, timezone
import base64
import os
import sys
from pathlib import Path
from typing import Callable, Generator

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "0")
os.environ.setdefault("JWT_SECRET", base64.urlsafe_b64encode(b"\x07" * 32).decode("ascii"))
os.environ.setdefault("ACCESS_TOKEN_EXPIRE_MINUTES", "60")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

# Ensure the project root (which exposes the ``backend`` package) is on ``sys.path``
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.app import models  # noqa: E402
from backend.app.database import Base, get_db  # noqa: E402
from backend.app.main import app  # noqa: E402
from backend.app.security import CallerIdentity, create_access_token, generate_password_hash  # noqa: E402

DEFAULT_PASSWORD = "Pump-Secret1"

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture(scope="session", autouse=True)
def setup_database() -> Generator[None, None, None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            db_session.expire_all()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def make_user(db_session: Session) -> Callable[..., models.User]:
    def _make_user(
        username: str,
        role: models.UserRole = models.UserRole.MANAGER,
        password: str = DEFAULT_PASSWORD,
    ) -> models.User:
        user = models.User(
            username=username,
            password_hash=generate_password_hash(password, iterations=1_000),
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_pump(db_session: Session) -> Callable[..., models.Pump]:
    def _make_pump(owner: models.User, name: str, **overrides) -> models.Pump:
        values = {
            "type": models.PumpType.CENTRIFUGAL,
            "area": "North",
            "latitude": -37.8,
            "longitude": 144.9,
            "flow_rate": 120.0,
            "offset": 0.0,
            "current_pressure": 50.0,
            "min_pressure": 10.0,
            "max_pressure": 100.0,
            "last_updated": datetime(2025, 7, 1, 8, 0, tzinfo=timezone.utc),
        }
        values.update(overrides)
        pump = models.Pump(name=name, user_id=owner.id, **values)
        db_session.add(pump)
        db_session.commit()
        return pump

    return _make_pump


@pytest.fixture
def make_inspection(db_session: Session) -> Callable[..., models.PumpInspection]:
    def _make_inspection(
        pump: models.Pump, inspector: models.User, **overrides
    ) -> models.PumpInspection:
        values = {
            "inspection_date": datetime.now(timezone.utc),
            "pressure_reading": 55.0,
            "flow_rate_reading": 110.0,
            "status": models.InspectionStatus.COMPLETED,
            "is_operational": True,
            "notes": None,
        }
        values.update(overrides)
        inspection = models.PumpInspection(pump_id=pump.id, inspector_id=inspector.id, **values)
        db_session.add(inspection)
        db_session.commit()
        return inspection

    return _make_inspection


@pytest.fixture
def auth_headers() -> Callable[[models.User], dict[str, str]]:
    def _auth_headers(user: models.User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _auth_headers


@pytest.fixture
def caller_for() -> Callable[[models.User], CallerIdentity]:
    def _caller_for(user: models.User) -> CallerIdentity:
        return CallerIdentity(
            user_id=user.id, username=user.username, role=models.UserRole(user.role)
        )

    return _caller_for
