"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_TIMEZONE: Final[str] = "UTC"


def now_utc() -> datetime:
    """Return the current instant as an aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Normalize ``value`` to an aware UTC datetime.

    Naive values are assumed to already be expressed in UTC, which is how they are
    stored in the database.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_naive_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` expressed in UTC but without ``tzinfo``.

    SQLite ``DATETIME`` columns drop offsets, so every timestamp is persisted as naive
    UTC and re-attached to ``timezone.utc`` when read back.
    """

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.replace(tzinfo=None)


def resolve_timezone(tz_name: str | None) -> tzinfo:
    """Resolve an IANA zone name, raising ``ValueError`` when it is unknown."""

    name = (tz_name or "").strip() or DEFAULT_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        # Directory names such as "America" raise IsADirectoryError.
        raise ValueError(f"Unknown timezone: {name}") from exc


def is_valid_timezone(tz_name: str | None) -> bool:
    try:
        resolve_timezone(tz_name)
    except ValueError:
        return False
    return True


def localize(value: datetime, tz_name: str | None) -> datetime:
    """Return ``value`` converted to the ``tz_name`` zone."""

    return ensure_utc(value).astimezone(resolve_timezone(tz_name))


def local_date(value: datetime, tz_name: str | None) -> date:
    """Return the calendar date of ``value`` as seen in the ``tz_name`` zone."""

    return localize(value, tz_name).date()
