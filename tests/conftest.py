"""Shared fixtures: a throwaway SQLite database and a clean application state."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / "habit_tracker_test.db"
TEST_ENCRYPTION_KEY = "0123456789abcdef" * 4

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["ENVIRONMENT"] = "development"
os.environ["REMINDER_SCHEDULER_ENABLED"] = "false"
os.environ["NOTIFICATION_ENCRYPTION_KEY"] = TEST_ENCRYPTION_KEY
for _name in ("SENDGRID_API_KEY", "SENDGRID_SENDER", "VAPID_PUBLIC_KEY", "VAPID_PRIVATE_KEY"):
    os.environ.pop(_name, None)

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app.config import get_settings  # noqa: E402
from app.domain.entities import ReminderService, User  # noqa: E402
from app.infrastructure import database  # noqa: E402
from app.infrastructure import models  # noqa: E402,F401
from app.infrastructure.rate_limit import ALL_RATE_LIMITERS  # noqa: E402
from app.infrastructure.repositories import UserRepository  # noqa: E402
from app.infrastructure.security import get_password_hash  # noqa: E402

DEFAULT_PASSWORD = "correct horse battery"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_state() -> Iterator[None]:
    """Recreate the tables and reset process-wide state around every test."""

    get_settings.cache_clear()
    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    for limiter in ALL_RATE_LIMITERS:
        limiter.clear()
    yield
    for limiter in ALL_RATE_LIMITERS:
        limiter.clear()
    get_settings.cache_clear()


@pytest.fixture
def db() -> Iterator[Session]:
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    """Persist a user; keyword arguments override the entity fields."""

    counter = iter(range(1, 10_000))

    def _make_user(**overrides) -> User:
        password = overrides.pop("password", DEFAULT_PASSWORD)
        values = {
            "id": None,
            "email": f"user{next(counter)}@example.com",
            "password_hash": get_password_hash(password),
            "email_verified": True,
        }
        values.update(overrides)
        return UserRepository(db).create(User(**values))

    return _make_user


@pytest.fixture
def default_password() -> str:
    return DEFAULT_PASSWORD


@pytest.fixture
def push_subscription() -> dict:
    return {
        "endpoint": "https://push.example.com/send/abc123",
        "expirationTime": None,
        "keys": {
            "p256dh": "BNcRdreALRFXTkOOUHK1EtK2wtaz5Ry4YfYCA_0QTpQtUbVlUls0VJXg7A8u-Ts1XbjhazAkj7I99e8QcYP7DkM",
            "auth": "tBHItJI5svbpez7KI4CCXg",
        },
    }


@pytest.fixture
def reminder_user(make_user, push_subscription) -> Callable[..., User]:
    """Create a user with push reminders enabled at 09:00 New York time."""

    def _reminder_user(**overrides) -> User:
        values = {
            "timezone": "America/New_York",
            "reminder_enabled": True,
            "reminder_service": ReminderService.PUSH,
            "reminder_time": "09:00",
            "push_subscription": push_subscription,
        }
        values.update(overrides)
        return make_user(**values)

    return _reminder_user


@pytest.fixture
def client() -> Iterator[TestClient]:
    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def csrf_headers(client: TestClient) -> Callable[[], dict[str, str]]:
    """Echo the CSRF cookie the way the front end does."""

    def _headers() -> dict[str, str]:
        settings = get_settings()
        return {settings.csrf_header_name: client.cookies.get(settings.csrf_cookie_name) or ""}

    return _headers
