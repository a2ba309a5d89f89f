from backend.app.auth.jwt import decode_access_token
from devconnector.models import User


def test_register_returns_token_for_new_user(test_app_client, sample_registration):
    client, session_factory = test_app_client

    resp = client.post("/api/users", json=sample_registration)

    assert resp.status_code == 200
    token = resp.json()["token"]
    payload = decode_access_token(token)

    session = session_factory()
    try:
        user = session.query(User).one()
        assert payload["sub"] == str(user.id)
        assert user.email == "jane@example.com"
        assert user.password_hash != sample_registration["password"]
    finally:
        session.close()


def test_register_derives_gravatar_avatar(test_app_client):
    client, session_factory = test_app_client

    client.post(
        "/api/users",
        json={"name": "Jane", "email": "  Jane@Example.COM ", "password": "secret123"},
    )

    session = session_factory()
    try:
        user = session.query(User).one()
        assert user.email == "jane@example.com"
        assert user.avatar.startswith("https://www.gravatar.com/avatar/")
        assert "s=200" in user.avatar
        assert "d=retro" in user.avatar
        assert "r=x" in user.avatar
    finally:
        session.close()


def test_register_same_email_twice_keeps_single_user(test_app_client, sample_registration):
    client, session_factory = test_app_client
    assert client.post("/api/users", json=sample_registration).status_code == 200

    resp = client.post("/api/users", json={**sample_registration, "email": "JANE@example.com"})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "User already exists"
    session = session_factory()
    try:
        assert session.query(User).count() == 1
    finally:
        session.close()


def test_register_validation_errors_are_listed(client):
    resp = client.post("/api/users", json={"name": "", "email": "not-an-email", "password": "123"})

    assert resp.status_code == 422
    body = resp.json()
    assert body["detail"] == "Validation error"
    assert body["status_code"] == 422
    assert {error["field"]: error["message"] for error in body["errors"]} == {
        "name": "Name is required",
        "email": "Please include a valid email",
        "password": "Please enter a password with 6 or more characters",
    }


def test_register_with_empty_body(client):
    resp = client.post("/api/users")

    assert resp.status_code == 422
    fields = {error["field"] for error in resp.json()["errors"]}
    assert fields == {"name", "email", "password"}


def test_register_accepts_apostrophe_in_local_part(client):
    resp = client.post(
        "/api/users", json={"name": "Pat", "email": "O'Brien@Example.com", "password": "secret123"}
    )

    assert resp.status_code == 200
    me = client.get("/api/auth", headers={"Authorization": f"Bearer {resp.json()['token']}"})
    assert me.json()["email"] == "o'brien@example.com"


def test_register_rejects_malformed_addresses(client):
    for email in ("a..b@example.com", ".jane@example.com", "jane.@example.com", "jane@-example.com"):
        resp = client.post("/api/users", json={"name": "Jane", "email": email, "password": "secret123"})

        assert resp.status_code == 422, email
        assert resp.json()["errors"] == [{"field": "email", "message": "Please include a valid email"}]
