from datetime import datetime, timedelta, timezone

from backend.app import models


def test_dashboard_stats_for_admin(client, make_user, make_pump, make_inspection, auth_headers):
    admin = make_user("dash-admin", models.UserRole.ADMIN)
    manager = make_user("dash-manager", models.UserRole.MANAGER)
    north = make_pump(manager, "North Well", area="North")
    make_pump(manager, "Dry Well", area="North", current_pressure=5.0)
    make_pump(admin, "South Gear", area="South", type=models.PumpType.GEAR)
    now = datetime.now(timezone.utc)
    make_inspection(north, admin, inspection_date=now - timedelta(days=2), pressure_reading=44.0)
    make_inspection(
        north,
        admin,
        inspection_date=now - timedelta(days=20),
        status=models.InspectionStatus.FAILED,
        is_operational=False,
    )

    response = client.get("/api/dashboard/stats", headers=auth_headers(admin))

    assert response.status_code == 200
    stats = response.json()
    assert stats["summary"] == {
        "totalPumps": 3,
        "operationalPumps": 2,
        "nonOperationalPumps": 1,
        "totalInspections": 2,
        "recentInspections": 1,
    }
    assert {row["type"]: row["count"] for row in stats["pumpTypes"]} == {
        "Centrifugal": 2,
        "Gear": 1,
    }
    assert {row["status"]: row["count"] for row in stats["inspectionStatuses"]} == {
        "Completed": 1,
        "Failed": 1,
    }
    assert stats["areaDistribution"] == [
        {"area": "North", "count": 2},
        {"area": "South", "count": 1},
    ]
    [reading] = stats["recentPressureReadings"]
    assert reading["pressure"] == 44.0
    assert reading["pumpName"] == "North Well"


def test_dashboard_stats_are_scoped_for_other_roles(
    client, make_user, make_pump, make_inspection, auth_headers
):
    manager = make_user("scoped-manager", models.UserRole.MANAGER)
    other = make_user("scoped-other", models.UserRole.MANAGER)
    mine = make_pump(manager, "Mine")
    make_pump(other, "Theirs")
    make_inspection(mine, other)

    response = client.get("/api/dashboard/stats", headers=auth_headers(manager))

    summary = response.json()["summary"]
    assert summary["totalPumps"] == 1
    assert summary["totalInspections"] == 0
    assert response.json()["recentPressureReadings"] == []
