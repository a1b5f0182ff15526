"""Shared fixtures.

Apps are built with an in-memory store, a fixed secret and the lowest
bcrypt cost so tests stay fast and isolated.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from training.config.app_config import AppConfig, AuthConfig
from training.config.courses import CourseData, load_course_data
from training.core.services import TrainingPlatform, build_platform
from training.db.stores import MemoryStore
from training.web.api import create_app

COURSES_FILE = Path(__file__).resolve().parents[1] / "data" / "config" / "courses_v1.yaml"

TEST_SECRET = "test-secret"


@pytest.fixture
def config() -> AppConfig:
    """App config with cheap hashing and no env lookups."""
    return AppConfig(
        auth=AuthConfig(secret_key=TEST_SECRET, secret_env=None, bcrypt_rounds=4),
    )


@pytest.fixture
def course_data() -> CourseData:
    """Course data from the shipped courses_v1.yaml."""
    return load_course_data(COURSES_FILE)


@pytest.fixture
def platform(config, course_data) -> TrainingPlatform:
    """Platform on a fresh in-memory store."""
    return build_platform(config, course_data=course_data, backend=MemoryStore())


@pytest.fixture
def client(platform) -> TestClient:
    """Test client for an app wrapping the platform fixture."""
    return TestClient(create_app(platform=platform))


@pytest.fixture
def register_user(client):
    """Return a helper that registers through the API."""

    def _register(email="ana@example.com", password="secret123", name="Ana"):
        return client.post(
            "/api/register",
            json={"email": email, "password": password, "name": name},
        )

    return _register


@pytest.fixture
def auth_headers(register_user) -> dict[str, str]:
    """Authorization header for a freshly registered user."""
    response = register_user()
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}
