"""Tests for signup, authentication and account use cases."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.orm import Session

from app.application.use_cases.sessions import create_session, validate_session
from app.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    change_password,
    confirm_verification_code,
    is_valid_email,
    issue_verification_code,
    register_user,
    update_email,
    update_profile,
    update_timezone,
)
from app.infrastructure.repositories import UserRepository, VerificationCodeRepository
from app.infrastructure.security import verify_password


@pytest.mark.parametrize(
    "email",
    ["user@example.com", "first.last+tag@sub.example.org", "a@b"],
)
def test_valid_emails(email: str) -> None:
    assert is_valid_email(email)


@pytest.mark.parametrize(
    "email",
    ["", "plain", "user@", "@example.com", "user@-example.com", "a" * 250 + "@example.com"],
)
def test_invalid_emails(email: str) -> None:
    assert not is_valid_email(email)


def test_register_user_normalizes_and_hashes(db: Session) -> None:
    user = register_user(db, email="  New.User@Example.com ", password="long-enough")

    assert user.id
    assert user.email == "new.user@example.com"
    assert user.email_verified is True
    assert user.timezone == "UTC"
    assert verify_password("long-enough", user.password_hash)


def test_register_user_rejects_duplicates(db: Session) -> None:
    register_user(db, email="dup@example.com", password="long-enough")

    with pytest.raises(ValueError, match="already registered"):
        register_user(db, email="DUP@example.com", password="long-enough")


@pytest.mark.parametrize(
    ("password", "message"),
    [("short", "at least 8"), ("x" * 129, "too long")],
)
def test_register_user_validates_password(db: Session, password: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        register_user(db, email="user@example.com", password=password)


def test_authenticate_user_success(db: Session, make_user, default_password: str) -> None:

    user = make_user(email="login@example.com")

    found, status = authenticate_user(db, "Login@Example.com", default_password)

    assert status is AuthenticationStatus.SUCCESS
    assert found.id == user.id


def test_unknown_email_and_wrong_password_share_status(
    db: Session, make_user, default_password: str
) -> None:

    make_user(email="login@example.com")

    _, unknown = authenticate_user(db, "nobody@example.com", default_password)
    _, wrong = authenticate_user(db, "login@example.com", "wrong-password")

    assert unknown is wrong is AuthenticationStatus.INVALID_CREDENTIALS


def test_unverified_user_needs_verification_when_required(
    db: Session, make_user, default_password: str
) -> None:

    make_user(email="new@example.com", email_verified=False)

    _, status = authenticate_user(
        db, "new@example.com", default_password, require_verified_email=True
    )
    _, relaxed = authenticate_user(db, "new@example.com", default_password)

    assert status is AuthenticationStatus.VERIFICATION_REQUIRED
    assert relaxed is AuthenticationStatus.SUCCESS


def test_verification_code_flow(db: Session, make_user) -> None:
    user = make_user(email_verified=False)
    now = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

    code = issue_verification_code(db, user, now=now)
    wrong = "000000" if code != "000000" else "111111"

    assert confirm_verification_code(db, user.id, wrong, now=now) is (
        AuthenticationStatus.INVALID_VERIFICATION_CODE
    )
    assert confirm_verification_code(db, user.id, code, now=now) is AuthenticationStatus.SUCCESS
    assert UserRepository(db).get(user.id).email_verified is True
    assert VerificationCodeRepository(db).get_latest(user.id) is None


def test_expired_or_missing_verification_code(db: Session, make_user) -> None:
    user = make_user(email_verified=False)
    now = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

    assert confirm_verification_code(db, user.id, "123456", now=now) is (
        AuthenticationStatus.VERIFICATION_NOT_FOUND
    )

    code = issue_verification_code(db, user, now=now)
    later = now + timedelta(minutes=16)

    assert confirm_verification_code(db, user.id, code, now=later) is (
        AuthenticationStatus.VERIFICATION_EXPIRED
    )
    assert UserRepository(db).get(user.id).email_verified is False


def test_change_password_revokes_every_session_and_opens_a_new_one(
    db: Session, make_user, default_password: str
) -> None:

    user = make_user()
    old_tokens = [create_session(db, user.id)[0] for _ in range(2)]

    token, user_session = change_password(
        db, user_id=user.id, current_password=default_password, new_password="brand-new-secret"
    )

    assert all(not validate_session(db, old).is_valid for old in old_tokens)
    assert validate_session(db, token).session.id == user_session.id
    _, status = authenticate_user(db, user.email, "brand-new-secret")
    assert status is AuthenticationStatus.SUCCESS


def test_change_password_requires_current_password(db: Session, make_user) -> None:
    user = make_user()
    token, _ = create_session(db, user.id)

    with pytest.raises(ValueError, match="incorrect"):
        change_password(
            db, user_id=user.id, current_password="nope-nope", new_password="brand-new-secret"
        )

    assert validate_session(db, token).is_valid


def test_update_timezone_accepts_only_known_zones(db: Session, make_user) -> None:
    user = make_user()

    assert update_timezone(db, user.id, "Europe/Madrid").timezone == "Europe/Madrid"
    with pytest.raises(ValueError):
        update_timezone(db, user.id, "Mars/Olympus")
    with pytest.raises(ValueError, match="Invalid timezone"):
        update_timezone(db, user.id, "America")
    assert UserRepository(db).get(user.id).timezone == "Europe/Madrid"


def test_update_profile(db: Session, make_user) -> None:
    user = make_user()

    updated = update_profile(
        db, user.id, display_name="  Ada  ", timezone="Asia/Tokyo", week_start="Sunday"
    )

    assert updated.display_name == "Ada"
    assert updated.timezone == "Asia/Tokyo"
    assert updated.week_start == "sunday"


@pytest.mark.parametrize(
    ("changes", "message"),
    [
        ({"display_name": "   "}, "Display name"),
        ({"display_name": "x" * 101}, "Display name"),
        ({"timezone": "Mars/Olympus"}, "Invalid timezone"),
        ({"week_start": "someday"}, "Invalid week start"),
    ],
)
def test_update_profile_rejects_invalid_fields(
    db: Session, make_user, changes: dict, message: str
) -> None:
    user = make_user()
    values = {"display_name": "Ada", "timezone": "UTC", "week_start": "monday", **changes}

    with pytest.raises(ValueError, match=message):
        update_profile(db, user.id, **values)

    stored = UserRepository(db).get(user.id)
    assert stored.display_name is None
    assert stored.timezone == "UTC"


def test_update_email_resets_verification(db: Session, make_user, default_password: str) -> None:
    user = make_user()

    updated = update_email(
        db, user_id=user.id, new_email=" New@Example.com ", password=default_password
    )

    assert updated.email == "new@example.com"
    assert updated.email_verified is False
    assert UserRepository(db).get_by_email("new@example.com").id == user.id


def test_update_email_checks_password_and_uniqueness(
    db: Session, make_user, default_password: str
) -> None:
    user = make_user()
    other = make_user()

    with pytest.raises(ValueError, match="Invalid password"):
        update_email(db, user_id=user.id, new_email="new@example.com", password="wrong password")
    with pytest.raises(ValueError, match="Email already in use"):
        update_email(db, user_id=user.id, new_email=other.email, password=default_password)
    with pytest.raises(ValueError, match="Invalid email"):
        update_email(db, user_id=user.id, new_email="not-an-email", password=default_password)

    stored = UserRepository(db).get(user.id)
    assert stored.email == user.email
    assert stored.email_verified is True
