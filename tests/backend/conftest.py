import os
import sys
from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.append(PROJECT_ROOT)

from backend.app.database import get_db  # noqa: E402
from backend.app.main import create_app  # noqa: E402


@pytest.fixture
def test_app_client(test_db) -> Iterator[tuple[TestClient, sessionmaker]]:
    db_url, TestingSessionLocal, engine = test_db

    app = create_app()

    def override_get_db() -> Iterator[Session]:
        db = TestingSessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client, TestingSessionLocal


@pytest.fixture
def client(test_app_client) -> TestClient:
    return test_app_client[0]


@pytest.fixture
def register_user(client) -> Callable[..., str]:
    """Register through the API and return the issued token."""

    def _register(
        name: str = "Jane Doe", email: str = "jane@example.com", password: str = "secret123"
    ) -> str:
        resp = client.post("/api/users", json={"name": name, "email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return resp.json()["token"]

    return _register


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(register_user) -> dict[str, str]:
    return bearer(register_user())


@pytest.fixture
def other_headers(register_user) -> dict[str, str]:
    return bearer(register_user(name="John Roe", email="john@example.com"))


@pytest.fixture
def profile_headers(client, auth_headers, sample_profile) -> dict[str, str]:
    """Headers of a user who already has a profile."""
    resp = client.post("/api/profile", json=sample_profile, headers=auth_headers)
    assert resp.status_code == 200, resp.text
    return auth_headers


@pytest.fixture
def post_id(client, auth_headers) -> int:
    resp = client.post("/api/posts", json={"text": "Hello world"}, headers=auth_headers)
    assert resp.status_code == 200, resp.text
    return resp.json()["id"]
