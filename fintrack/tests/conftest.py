"""
Shared pytest fixtures for the FinTrack test suite.

Each test gets a fresh app bound to its own temporary SQLite database, so
tests never touch a real store and never see each other's rows.
"""

import pytest
from fastapi.testclient import TestClient

from fintrack.config import Settings
from fintrack.main import create_app

TEST_SECRET = "test-secret"

REGISTER_PAYLOAD = {
    "username": "alice",
    "password": "s3cret-pass",
    "firstname": "Alice",
    "lastname": "Liddell",
}


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'fintrack_test.db'}",
        jwt_secret=TEST_SECRET,
        log_level="DEBUG",
    )


@pytest.fixture
def client(settings):
    """TestClient with startup/shutdown hooks run (the store is opened)."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def test_db(client):
    """Direct SQLAlchemy session on the same store the app uses."""
    db = client.app.state.database.session()
    yield db
    db.close()


@pytest.fixture
def registered_token(client):
    r = client.post("/users", json=REGISTER_PAYLOAD)
    assert r.status_code == 200, f"Registration failed: {r.status_code} {r.text}"
    return r.json()["token"]
