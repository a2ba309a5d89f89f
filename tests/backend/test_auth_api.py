from datetime import datetime, timedelta, timezone

from jose import jwt

from backend.app.auth.jwt import create_access_token
from devconnector.config import get_settings


def test_token_from_registration_loads_user(client, register_user):
    token = register_user()

    resp = client.get("/api/auth", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Jane Doe"
    assert body["email"] == "jane@example.com"
    assert "password" not in body
    assert "password_hash" not in body


def test_x_auth_token_header_is_accepted(client, register_user):
    token = register_user()

    resp = client.get("/api/auth", headers={"x-auth-token": token})

    assert resp.status_code == 200
    assert resp.json()["email"] == "jane@example.com"


def test_missing_token_is_rejected(client):
    resp = client.get("/api/auth")

    assert resp.status_code == 401
    assert resp.json()["detail"] == "No token, authorization denied"


def test_garbage_token_is_rejected(client):
    resp = client.get("/api/auth", headers={"Authorization": "Bearer not.a.jwt"})

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token is not valid"


def test_expired_token_is_rejected(client, register_user):
    register_user()
    settings = get_settings()
    expired = jwt.encode(
        {"sub": "1", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )

    resp = client.get("/api/auth", headers={"Authorization": f"Bearer {expired}"})

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token is not valid"


def test_token_signed_with_other_key_is_rejected(client):
    forged = jwt.encode({"sub": "1"}, "another-secret-key-of-sufficient-length!!", algorithm="HS256")

    resp = client.get("/api/auth", headers={"Authorization": f"Bearer {forged}"})

    assert resp.status_code == 401


def test_token_for_deleted_user(client):
    token = create_access_token({"sub": "999"})

    resp = client.get("/api/auth", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid token. User does not exist."


def test_login_returns_token(client, register_user):
    register_user()

    resp = client.post("/api/auth", json={"email": "jane@example.com", "password": "secret123"})

    assert resp.status_code == 200
    token = resp.json()["token"]
    me = client.get("/api/auth", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["name"] == "Jane Doe"


def test_wrong_password_and_unknown_email_look_the_same(client, register_user):
    register_user()

    wrong_password = client.post(
        "/api/auth", json={"email": "jane@example.com", "password": "not-the-password"}
    )
    unknown_email = client.post(
        "/api/auth", json={"email": "nobody@example.com", "password": "secret123"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 422
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["detail"] == "Invalid username or password"


def test_login_requires_password(client):
    resp = client.post("/api/auth", json={"email": "jane@example.com"})

    assert resp.status_code == 422
    assert resp.json()["errors"] == [{"field": "password", "message": "Password is required"}]
