"""Structured logging of authentication related security events."""

from __future__ import annotations

import json
import logging
from enum import Enum

from app.utils import now_utc

security_logger = logging.getLogger("app.security")


class SecurityEventType(str, Enum):
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGIN_RATE_LIMITED = "login_rate_limited"
    SIGNUP_SUCCESS = "signup_success"
    SIGNUP_FAILED = "signup_failed"
    SIGNUP_RATE_LIMITED = "signup_rate_limited"
    VERIFICATION_FAILED = "verification_failed"
    VERIFICATION_RATE_LIMITED = "verification_rate_limited"
    UNAUTHORIZED_ACCESS = "unauthorized_access"
    CSRF_FAILED = "csrf_failed"


_FAILURE_EVENTS = {
    SecurityEventType.LOGIN_FAILED,
    SecurityEventType.SIGNUP_FAILED,
    SecurityEventType.VERIFICATION_FAILED,
    SecurityEventType.UNAUTHORIZED_ACCESS,
    SecurityEventType.CSRF_FAILED,
    SecurityEventType.LOGIN_RATE_LIMITED,
    SecurityEventType.SIGNUP_RATE_LIMITED,
    SecurityEventType.VERIFICATION_RATE_LIMITED,
}


def log_security_event(
    event_type: SecurityEventType,
    ip: str,
    *,
    email: str | None = None,
    user_id: str | None = None,
    message: str | None = None,
) -> dict[str, str]:
    """Record ``event_type`` with the real cause; callers show users a generic message."""

    entry = {"type": event_type.value, "ip": ip, "timestamp": now_utc().isoformat()}
    if email:
        entry["email"] = email
    if user_id:
        entry["user_id"] = user_id
    if message:
        entry["message"] = message

    level = logging.WARNING if event_type in _FAILURE_EVENTS else logging.INFO
    security_logger.log(level, "[SECURITY] %s", json.dumps(entry, sort_keys=True))
    return entry


__all__ = ["SecurityEventType", "log_security_event", "security_logger"]
