from datetime import datetime, timedelta, timezone

import pytest

from backend.app import models


@pytest.fixture
def site(make_user, make_pump):
    admin = make_user("chief", models.UserRole.ADMIN)
    manager = make_user("site-manager", models.UserRole.MANAGER)
    inspector = make_user("walker", models.UserRole.INSPECTOR)
    pump = make_pump(manager, "Intake")
    return {"admin": admin, "manager": manager, "inspector": inspector, "pump": pump}


def test_record_inspection(client, db_session, site, auth_headers):
    response = client.post(
        "/api/inspections",
        json={
            "pumpId": site["pump"].id,
            "pressureReading": 48.5,
            "flowRateReading": 101.0,
            "notes": "Bearing noise",
            "isOperational": True,
        },
        headers=auth_headers(site["inspector"]),
    )

    assert response.status_code == 201
    payload = response.json()
    assert payload["inspectorId"] == site["inspector"].id
    assert payload["inspectorName"] == "walker"
    assert payload["status"] == "Completed"
    assert payload["pumpId"] == site["pump"].id
    assert db_session.get(models.PumpInspection, payload["id"]) is not None


def test_record_inspection_for_missing_pump(client, site, auth_headers):
    response = client.post(
        "/api/inspections",
        json={
            "pumpId": 9999,
            "pressureReading": 1.0,
            "flowRateReading": 1.0,
            "isOperational": False,
        },
        headers=auth_headers(site["inspector"]),
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Pump not found"


def test_record_inspection_validates_payload(client, site, auth_headers):
    response = client.post(
        "/api/inspections",
        json={"pumpId": site["pump"].id, "pressureReading": -3, "isOperational": True},
        headers=auth_headers(site["inspector"]),
    )

    assert response.status_code == 422
    errors = response.json()["validationErrors"]
    assert "pressureReading" in errors
    assert "flowRateReading" in errors


def test_list_inspections_is_scoped_to_inspector(client, site, make_inspection, auth_headers):
    own = make_inspection(site["pump"], site["inspector"])
    make_inspection(site["pump"], site["admin"])

    mine = client.get("/api/inspections", headers=auth_headers(site["inspector"]))
    everything = client.get("/api/inspections", headers=auth_headers(site["admin"]))

    assert [item["id"] for item in mine.json()["data"]] == [own.id]
    assert everything.json()["totalCount"] == 2


def test_list_inspections_sorted_by_date(client, site, make_inspection, auth_headers):
    now = datetime.now(timezone.utc)
    older = make_inspection(site["pump"], site["admin"], inspection_date=now - timedelta(days=3))
    newer = make_inspection(site["pump"], site["admin"], inspection_date=now - timedelta(days=1))

    response = client.get(
        "/api/inspections",
        params={"sortBy": "date", "sortDirection": "desc"},
        headers=auth_headers(site["admin"]),
    )

    assert [item["id"] for item in response.json()["data"]] == [newer.id, older.id]


def test_pump_inspections_newest_first(client, site, make_inspection, auth_headers):
    now = datetime.now(timezone.utc)
    first = make_inspection(site["pump"], site["inspector"], inspection_date=now - timedelta(days=2))
    second = make_inspection(site["pump"], site["inspector"], inspection_date=now)

    response = client.get(
        f"/api/inspections/pump/{site['pump'].id}", headers=auth_headers(site["manager"])
    )

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [second.id, first.id]


def test_pump_inspections_require_visible_pump(client, site, make_user, auth_headers):
    outsider = make_user("outsider", models.UserRole.MANAGER)

    denied = client.get(
        f"/api/inspections/pump/{site['pump'].id}", headers=auth_headers(outsider)
    )
    missing = client.get("/api/inspections/pump/9999", headers=auth_headers(site["admin"]))

    assert denied.status_code == 403
    assert missing.status_code == 404


def test_pressure_history_window_oldest_first(client, site, make_inspection, auth_headers):
    now = datetime.now(timezone.utc)
    make_inspection(site["pump"], site["admin"], inspection_date=now - timedelta(days=40))
    make_inspection(
        site["pump"], site["admin"], inspection_date=now - timedelta(days=5), pressure_reading=30.0
    )
    make_inspection(
        site["pump"], site["admin"], inspection_date=now - timedelta(days=1), pressure_reading=31.0
    )

    default = client.get(
        f"/api/inspections/pump/{site['pump'].id}/pressure-history",
        headers=auth_headers(site["manager"]),
    )
    narrow = client.get(
        f"/api/inspections/pump/{site['pump'].id}/pressure-history",
        params={"days": 2},
        headers=auth_headers(site["manager"]),
    )

    assert default.status_code == 200
    assert [point["pressure"] for point in default.json()] == [30.0, 31.0]
    assert set(default.json()[0]) == {"date", "pressure", "flowRate", "isOperational"}
    assert [point["pressure"] for point in narrow.json()] == [31.0]


def test_pressure_history_rejects_out_of_range_days(client, site, auth_headers):
    response = client.get(
        f"/api/inspections/pump/{site['pump'].id}/pressure-history",
        params={"days": 0},
        headers=auth_headers(site["admin"]),
    )

    assert response.status_code == 422
