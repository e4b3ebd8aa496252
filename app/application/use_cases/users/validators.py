"""Common validation helpers for user use cases."""

import re

from app.utils import is_valid_timezone

MAX_EMAIL_LENGTH = 254
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128

_EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str | None) -> bool:
    if not email or not isinstance(email, str):
        return False
    return len(email) <= MAX_EMAIL_LENGTH and _EMAIL_PATTERN.match(email) is not None


def ensure_valid_email(email: str) -> str:
    """Return the normalized address or raise ``ValueError``."""

    normalized = normalize_email(email or "")
    if not is_valid_email(normalized):
        raise ValueError("Invalid email address format")
    return normalized


def ensure_valid_password(password: str) -> str:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(password) > MAX_PASSWORD_LENGTH:
        raise ValueError("Password is too long")
    return password


WEEK_START_DAYS = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)
MAX_DISPLAY_NAME_LENGTH = 100


def ensure_valid_display_name(display_name: str | None) -> str:
    normalized = (display_name or "").strip()
    if not normalized or len(normalized) > MAX_DISPLAY_NAME_LENGTH:
        raise ValueError(
            f"Display name must be between 1 and {MAX_DISPLAY_NAME_LENGTH} characters"
        )
    return normalized


def ensure_valid_week_start(week_start: str | None) -> str:
    normalized = (week_start or "").strip().lower()
    if normalized not in WEEK_START_DAYS:
        raise ValueError("Invalid week start value")
    return normalized


def ensure_valid_timezone(tz_name: str) -> str:
    normalized = (tz_name or "").strip()
    if not normalized or not is_valid_timezone(normalized):
        raise ValueError("Invalid timezone")
    return normalized
