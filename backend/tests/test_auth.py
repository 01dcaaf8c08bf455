from backend.app import models

STRONG_PASSWORD = "Str0ng!Pass"


def _register(client, username="newcomer", password=STRONG_PASSWORD):
    return client.post("/auth/register", json={"username": username, "password": password})


def test_register_issues_tokens_for_a_manager(client, db_session):
    response = _register(client)

    assert response.status_code == 201
    payload = response.json()
    assert payload["accessToken"]
    assert payload["refreshToken"]
    assert payload["tokenType"] == "bearer"
    assert payload["expiresIn"] == 3600
    assert payload["role"] == "Manager"
    stored = db_session.query(models.User).filter_by(username="newcomer").one()
    assert stored.role is models.UserRole.MANAGER
    assert stored.password_hash != STRONG_PASSWORD


def test_register_rejects_weak_password(client):
    response = _register(client, password="short")

    assert response.status_code == 400
    body = response.json()
    assert body["errorCode"] == "VALIDATION_ERROR"
    problems = body["validationErrors"]["password"]
    assert "Password must be at least 8 characters long." in problems
    assert "Password must contain at least one number." in problems


def test_register_rejects_taken_username(client, make_user):
    make_user("Taken")

    response = _register(client, username="taken")

    assert response.status_code == 409
    assert response.json()["errorCode"] == "CONFLICT"


def test_login_and_use_access_token(client, make_user, make_pump):
    user = make_user("field-manager")
    make_pump(user, "Mine")

    login = client.post(
        "/auth/login", json={"username": "Field-Manager", "password": "Pump-Secret1"}
    )

    assert login.status_code == 200
    token = login.json()["accessToken"]
    listing = client.get("/api/pumps", headers={"Authorization": f"Bearer {token}"})
    assert listing.json()["totalCount"] == 1


def test_login_rejects_bad_credentials(client, make_user):
    make_user("careful")

    wrong_password = client.post(
        "/auth/login", json={"username": "careful", "password": "Wrong-Secret1"}
    )
    unknown_user = client.post(
        "/auth/login", json={"username": "nobody", "password": "Wrong-Secret1"}
    )

    for response in (wrong_password, unknown_user):
        assert response.status_code == 401
        assert response.json()["errorCode"] == "INVALID_CREDENTIALS"
        assert response.json()["message"] == "Invalid username or password"


def test_refresh_rotates_the_token(client):
    issued = _register(client).json()

    rotated = client.post("/auth/refresh", json={"refreshToken": issued["refreshToken"]})
    replayed = client.post("/auth/refresh", json={"refreshToken": issued["refreshToken"]})

    assert rotated.status_code == 200
    assert rotated.json()["refreshToken"] != issued["refreshToken"]
    assert replayed.status_code == 401
    assert replayed.json()["errorCode"] == "INVALID_TOKEN"


def test_revoke_refresh_token(client):
    issued = _register(client).json()
    headers = {"Authorization": f"Bearer {issued['accessToken']}"}

    revoked = client.post(
        "/auth/revoke", json={"refreshToken": issued["refreshToken"]}, headers=headers
    )
    refresh = client.post("/auth/refresh", json={"refreshToken": issued["refreshToken"]})

    assert revoked.status_code == 200
    assert revoked.json() == {"success": True, "message": "Refresh token revoked"}
    assert refresh.status_code == 401


def test_cannot_revoke_someone_elses_token(client):
    owner = _register(client, username="owner").json()
    intruder = _register(client, username="intruder").json()

    response = client.post(
        "/auth/revoke",
        json={"refreshToken": owner["refreshToken"]},
        headers={"Authorization": f"Bearer {intruder['accessToken']}"},
    )

    assert response.status_code == 404
    assert response.json()["errorCode"] == "NOT_FOUND"


def test_malformed_bearer_token_is_rejected(client):
    response = client.get("/api/pumps", headers={"Authorization": "Bearer not.a.jwt"})

    assert response.status_code == 401
    assert response.json()["errorCode"] == "INVALID_TOKEN"
