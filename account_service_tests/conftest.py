"""
Shared fixtures: every test gets its own app bound to a throwaway SQLite file.
"""
import pytest
from fastapi.testclient import TestClient

from account_service.config import Settings
from account_service.main import create_app
from account_service_tests.helpers import TEST_SECRET, make_registration


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        JWT_SECRET=TEST_SECRET,
        JWT_EXPIRE_MINUTES=60,
        PASSWORD_HASH_ROUNDS=1000,
        LOG_LEVEL="WARNING",
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def registered(client):
    """Register a fresh user and return (request payload, response data)."""
    payload = make_registration()
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return payload, response.json()["data"]
