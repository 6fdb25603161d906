"""Shared test fixtures for credgate."""

import pytest

from credgate.auth.service import AuthService
from credgate.config import Settings
from credgate.db import SQLiteCredentialStore, init_db
from credgate.main import create_app

TEST_SECRET = "test-secret-key-that-is-at-least-32-bytes-long"
OTHER_SECRET = "another-secret-key-that-is-at-least-32-bytes"


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a temp database with a fast bcrypt work factor."""
    return Settings(
        database_path=str(tmp_path / "credgate.db"),
        jwt_secret_key=TEST_SECRET,
        bcrypt_work_factor=4,
    )


@pytest.fixture
def store(test_settings):
    """Credential store over a freshly initialized database."""
    init_db(test_settings.database_path)
    return SQLiteCredentialStore(test_settings.database_path)


@pytest.fixture
def auth_service(store, test_settings):
    """AuthService bound to the test store."""
    return AuthService.from_settings(store, test_settings)


@pytest.fixture
def app(test_settings):
    """Flask app built by the application factory."""
    app = create_app(test_settings)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def registered_user(client):
    """Register a user through the API.

    Returns a tuple of (response_json, email, password).
    """
    email, password = "a@x.com", "pw123"
    response = client.post("/auth/register", json={"email": email, "password": password})
    assert response.status_code == 201
    return response.get_json(), email, password
