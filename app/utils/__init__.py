"""Utility helpers for reusable functionality."""

from .datetime import (
    DEFAULT_TIMEZONE,
    ensure_naive_utc,
    ensure_utc,
    is_valid_timezone,
    local_date,
    localize,
    now_utc,
    resolve_timezone,
)

__all__ = [
    "DEFAULT_TIMEZONE",
    "ensure_naive_utc",
    "ensure_utc",
    "is_valid_timezone",
    "local_date",
    "localize",
    "now_utc",
    "resolve_timezone",
]
