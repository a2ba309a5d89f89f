"""
Pytest fixtures for DevConnector tests.

Each test gets a fresh in-memory SQLite database (StaticPool keeps the
single connection alive across sessions).
"""

import os

# Settings are cached on first use; pin the test environment before any import.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256-signing"
os.environ["ENV"] = "test"
os.environ.pop("GITHUB_TOKEN", None)

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import devconnector.models  # noqa: F401,E402
from devconnector.db import Base, enable_sqlite_foreign_keys  # noqa: E402


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh test database for each test using ORM."""
    db_url = "sqlite://"
    engine = create_engine(
        db_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    yield db_url, TestingSessionLocal, engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        if session.is_active:
            session.commit()
        else:
            session.rollback()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture
def sample_registration():
    return {"name": "Jane Doe", "email": "jane@example.com", "password": "secret123"}


@pytest.fixture
def sample_profile():
    """Profile form as the web client submits it."""
    return {
        "status": "Developer",
        "skills": "python, go ,, rust",
        "company": "Acme",
        "location": "Berlin",
        "github_username": "janedoe",
        "twitter": "https://twitter.com/janedoe",
    }


@pytest.fixture
def sample_experience():
    return {
        "title": "Engineer",
        "company": "Acme",
        "location": "Berlin",
        "from": date(2020, 1, 1).isoformat(),
        "current": True,
    }


@pytest.fixture
def sample_education():
    return {
        "school": "TU Berlin",
        "degree": "MSc",
        "fieldofstudy": "Computer Science",
        "from": "2015-10-01",
        "to": "2017-09-30",
    }


@pytest.fixture
def sample_github_repos():
    """Sample GitHub REST API repository listing."""
    return [
        {
            "id": 1,
            "name": "first",
            "html_url": "https://github.com/janedoe/first",
            "created_at": "2019-01-01T00:00:00Z",
            "stargazers_count": 3,
        },
        {
            "id": 2,
            "name": "second",
            "html_url": "https://github.com/janedoe/second",
            "created_at": "2020-01-01T00:00:00Z",
            "stargazers_count": 0,
        },
    ]
