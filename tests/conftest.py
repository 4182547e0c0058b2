"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest

from api.dependencies import ServiceContainer, reset_container
from shared.config import Settings
from shared.models import Role, Session

from tests.fakes import FakeSupabase
from tests.helpers import (
    ADMIN_EMAIL,
    ADMIN_ID,
    CHAIR_EMAIL,
    CHAIR_ID,
    LEGACY_EMAIL,
    LEGACY_ID,
    MEMBER_EMAIL,
    MEMBER_ID,
    TEST_JWT_SECRET,
)


@pytest.fixture(autouse=True)
def reset_container_singleton():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        supabase_url="https://fake.supabase.co",
        supabase_jwt_secret=TEST_JWT_SECRET,
        admin_emails=[CHAIR_EMAIL],
    )


@pytest.fixture
def fake_db() -> FakeSupabase:
    """In-memory backend seeded with one profile of each kind."""
    db = FakeSupabase()
    db.seed(
        "users",
        {"id": MEMBER_ID, "name": "Uma Member", "email": MEMBER_EMAIL, "role": "user"},
        {"id": ADMIN_ID, "name": "Ada Admin", "email": ADMIN_EMAIL, "role": "admin"},
        {"id": CHAIR_ID, "name": "Cy Chair", "email": CHAIR_EMAIL, "role": "user"},
        {"id": LEGACY_ID, "name": "Lee Legacy", "email": LEGACY_EMAIL},
    )
    return db


@pytest.fixture
def member_session() -> Session:
    return Session(subject_id=MEMBER_ID, email=MEMBER_EMAIL, display_name="Uma Member", role=Role.USER)


@pytest.fixture
def admin_session() -> Session:
    return Session(subject_id=ADMIN_ID, email=ADMIN_EMAIL, display_name="Ada Admin", role=Role.ADMIN)


@pytest.fixture
def container(settings, fake_db, monkeypatch) -> ServiceContainer:
    """Service container over the fake backend, installed as the app's container."""
    container = ServiceContainer(settings=settings, db=fake_db)
    monkeypatch.setattr("api.dependencies._container", container)
    return container


@pytest.fixture
def client(container):
    """TestClient bound to the fake-backed container."""
    from fastapi.testclient import TestClient
    from api import app

    with TestClient(app) as test_client:
        yield test_client
