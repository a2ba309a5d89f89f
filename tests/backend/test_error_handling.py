from fastapi.testclient import TestClient
from sqlalchemy.orm.exc import StaleDataError

from backend.app.database import get_db
from backend.app.main import create_app
from backend.app.routers import posts as posts_router


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_readiness_checks_database(client):
    resp = client.get("/health/ready")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ready", "checks": {"database": True}}


def test_unknown_route_uses_error_shape(client):
    resp = client.get("/api/nothing-here")

    assert resp.status_code == 404
    assert resp.json() == {"detail": "Not Found", "status_code": 404}


def test_unhandled_exception_is_generic_500(monkeypatch, test_db):
    _, TestingSessionLocal, _ = test_db
    app = create_app()

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    def explode(db):
        raise RuntimeError("database password is hunter2")

    app.dependency_overrides[get_db] = override_get_db
    monkeypatch.setattr(posts_router.post_service, "list_posts", explode)

    with TestClient(app, raise_server_exceptions=False) as client:
        resp = client.get("/api/posts")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Server error", "status_code": 500}
    assert "hunter2" not in resp.text


def test_concurrent_modification_is_409(monkeypatch, client, post_id, auth_headers):
    def stale(db, user_id, raw_post_id):
        raise StaleDataError("UPDATE statement on table 'posts' expected to update 1 row(s)")

    monkeypatch.setattr(posts_router.post_service, "like_post", stale)

    resp = client.put(f"/api/posts/like/{post_id}", headers=auth_headers)

    assert resp.status_code == 409
    assert resp.json()["detail"] == "Resource was modified concurrently, please retry"


def test_responses_carry_request_id_and_security_headers(client):
    resp = client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert resp.headers["x-request-id"] == "abc-123"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"


def test_request_id_generated_when_missing(client):
    resp = client.get("/health")

    assert resp.headers["x-request-id"]


def test_oversized_request_is_rejected(client, auth_headers):
    resp = client.post(
        "/api/posts",
        content=b"{}",
        headers={**auth_headers, "Content-Type": "application/json", "Content-Length": str(5 * 1024 * 1024)},
    )

    assert resp.status_code == 413
