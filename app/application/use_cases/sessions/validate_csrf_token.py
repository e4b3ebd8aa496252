"""Use case for checking a request's CSRF token against its session."""

from app.infrastructure.security import constant_time_equals


def validate_csrf_token(session_csrf_token: str | None, request_token: str | None) -> bool:
    if not session_csrf_token or not request_token:
        return False
    return constant_time_equals(session_csrf_token, request_token)
