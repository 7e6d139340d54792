"""
Task Manager API - Test Configuration

Shared fixtures for CI-safe testing without MongoDB.
"""

import pytest
from datetime import datetime, timezone, timedelta

from fastapi.testclient import TestClient

from taskmanager.config import Settings
from taskmanager.main import create_app
from taskmanager.auth.dependencies import get_token_service, get_user_repository
from taskmanager.auth.repository import InMemoryUserRepository
from taskmanager.auth.tokens import TokenService
from taskmanager.tasks.repository import InMemoryTaskRepository
from taskmanager.tasks.router import get_task_service
from taskmanager.tasks.service import TaskService


TEST_SECRET_KEY = "test-secret-key-for-task-manager-suite"


class FrozenClock:
    """A clock that returns a fixed time for deterministic testing."""

    def __init__(self, frozen_time: datetime):
        self._frozen_time = frozen_time

    def __call__(self) -> datetime:
        return self._frozen_time

    def set(self, new_time: datetime) -> None:
        self._frozen_time = new_time

    def advance(self, delta: timedelta) -> None:
        self._frozen_time += delta


class TickingClock(FrozenClock):
    """A clock that moves one second forward every time it is read."""

    def __call__(self) -> datetime:
        self.advance(timedelta(seconds=1))
        return self._frozen_time


@pytest.fixture
def frozen_now() -> datetime:
    """A fixed 'now' time for testing."""
    return datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def frozen_clock(frozen_now) -> FrozenClock:
    """A controllable clock for timestamp testing."""
    return FrozenClock(frozen_now)


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(TEST_SECRET_KEY)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    """Provide a fresh in-memory user repository for each test."""
    return InMemoryUserRepository()


@pytest.fixture
def task_repository() -> InMemoryTaskRepository:
    """Provide a fresh in-memory task repository for each test."""
    return InMemoryTaskRepository()


@pytest.fixture
def test_settings() -> Settings:
    app_settings = Settings()
    app_settings.JWT_SECRET_KEY = TEST_SECRET_KEY
    app_settings.API_PREFIX = ""
    return app_settings


@pytest.fixture
def app(test_settings, token_service, user_repository, task_repository, frozen_now):
    """Application wired to in-memory stores; the lifespan is never entered."""
    application = create_app(test_settings)
    clock = TickingClock(frozen_now)

    application.dependency_overrides[get_token_service] = lambda: token_service
    application.dependency_overrides[get_user_repository] = lambda: user_repository
    application.dependency_overrides[get_task_service] = lambda: TaskService(
        task_repository, clock=clock
    )

    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Create test client with in-memory repositories."""
    return TestClient(app)


@pytest.fixture
def registered_user(client):
    """Register a test user and return credentials."""
    credentials = {
        "name": "Test User",
        "email": "testuser@example.com",
        "password": "testpassword123",
    }
    client.post("/auth/register", json=credentials)
    return credentials


@pytest.fixture
def auth_token(client, registered_user):
    """Get an auth token for the registered user."""
    response = client.post(
        "/auth/login",
        json={"email": registered_user["email"], "password": registered_user["password"]},
    )
    return response.json()["token"]


@pytest.fixture
def auth_headers(auth_token):
    """Create Authorization headers for authenticated requests."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def second_user_credentials():
    """Credentials for a second test user."""
    return {
        "name": "Second User",
        "email": "seconduser@example.com",
        "password": "secondpassword123",
    }


@pytest.fixture
def second_user_token(client, second_user_credentials):
    """Register a second user and get their auth token."""
    response = client.post("/auth/register", json=second_user_credentials)
    return response.json()["token"]


@pytest.fixture
def second_auth_headers(second_user_token):
    """Authorization headers for the second user."""
    return {"Authorization": f"Bearer {second_user_token}"}
