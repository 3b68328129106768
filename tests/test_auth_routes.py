from tests.conftest import auth_headers, make_user

REGISTER_PAYLOAD = {
    "username": "newstudent",
    "email": "newstudent@example.com",
    "password": "secret123",
    "first_name": "New",
    "last_name": "Student",
}


def test_register_creates_student(client):
    response = client.post("/api/v1/user/register", json=REGISTER_PAYLOAD)

    assert response.status_code == 201
    assert response.get_json()["success"] is True


def test_register_reports_missing_fields(client):
    response = client.post("/api/v1/user/register", json={"username": "x"})

    body = response.get_json()
    assert response.status_code == 400
    assert body["success"] is False
    assert set(body["errors"]) == {"email", "password", "first_name", "last_name"}


def test_register_rejects_unknown_role(client):
    response = client.post("/api/v1/user/register", json={**REGISTER_PAYLOAD, "role": "admin"})

    assert response.status_code == 400
    assert "role" in response.get_json()["errors"]


def test_register_duplicate_email(client):
    client.post("/api/v1/user/register", json=REGISTER_PAYLOAD)
    response = client.post("/api/v1/user/register", json={**REGISTER_PAYLOAD, "username": "another"})

    assert response.status_code == 409
    assert "email" in response.get_json()["message"]


def test_login_sets_cookie_and_returns_token(app, client):
    make_user(app, "alice")

    response = client.post("/api/v1/user/login", json={"username": "alice@example.com", "password": "secret123"})

    body = response.get_json()
    assert response.status_code == 200
    assert body["success"] is True
    assert body["token"]
    assert body["user"]["username"] == "alice"
    assert "access_token=" in response.headers["Set-Cookie"]


def test_login_with_wrong_password(app, client):
    make_user(app, "alice")

    response = client.post("/api/v1/user/login", json={"username": "alice", "password": "nope"})

    assert response.status_code == 400
    assert response.get_json() == {"success": False, "message": "Incorrect username or password"}


def test_login_requires_both_fields(client):
    response = client.post("/api/v1/user/login", json={"username": "alice"})
    assert response.status_code == 400


def test_check_auth_accepts_cookie(app, client):
    make_user(app, "alice", role="instructor")
    client.post("/api/v1/user/login", json={"username": "alice", "password": "secret123"})

    response = client.get("/api/v1/user/check-auth")

    assert response.status_code == 200
    assert response.get_json()["user"]["role"] == "instructor"


def test_check_auth_accepts_bearer_header(app, client):
    user_id = make_user(app, "bob")

    response = client.get("/api/v1/user/check-auth", headers=auth_headers(app, user_id))

    assert response.status_code == 200
    assert response.get_json()["user"]["id"] == user_id


def test_missing_and_invalid_tokens(client):
    assert client.get("/api/v1/user/check-auth").status_code == 401

    response = client.get("/api/v1/user/check-auth", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.get_json()["success"] is False


def test_logout_clears_cookie(app, client):
    make_user(app, "alice")
    client.post("/api/v1/user/login", json={"username": "alice", "password": "secret123"})

    response = client.post("/api/v1/user/logout")

    assert response.status_code == 200
    assert client.get("/api/v1/user/check-auth").status_code == 401


def test_profile_read_and_update(app, client):
    user_id = make_user(app, "carol")
    headers = auth_headers(app, user_id)

    response = client.get("/api/v1/user/profile", headers=headers)
    assert response.status_code == 200
    assert response.get_json()["user"]["enrolled_courses"] == []

    response = client.put("/api/v1/user/profile/update", headers=headers,
                          json={"first_name": "Caroline", "country": "India"})
    user = response.get_json()["user"]
    assert response.status_code == 200
    assert user["first_name"] == "Caroline"
    assert user["country"] == "India"


def test_profile_update_rejects_taken_email(app, client):
    make_user(app, "dave")
    user_id = make_user(app, "erin")

    response = client.put("/api/v1/user/profile/update", headers=auth_headers(app, user_id),
                          json={"email": "dave@example.com"})

    assert response.status_code == 409


def test_register_rejects_non_object_body_and_non_string_password(client):
    response = client.post("/api/v1/user/register", json=["newstudent", "secret123"])
    assert response.status_code == 400
    assert "body" in response.get_json()["errors"]

    response = client.post("/api/v1/user/register", json={**REGISTER_PAYLOAD, "password": 12345678})
    assert response.status_code == 400
    assert "password" in response.get_json()["errors"]


def test_login_rejects_non_string_password(app, client):
    make_user(app, "carol")

    response = client.post("/api/v1/user/login", json={"username": "carol", "password": 123})

    assert response.status_code == 400
    assert "password" in response.get_json()["errors"]
