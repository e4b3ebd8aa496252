"""Use cases for the session lifecycle."""

from .create_session import create_session
from .invalidate_session import (
    delete_expired_sessions,
    invalidate_session,
    invalidate_user_sessions,
)
from .validate_csrf_token import validate_csrf_token
from .validate_session import validate_session

__all__ = [
    "create_session",
    "delete_expired_sessions",
    "invalidate_session",
    "invalidate_user_sessions",
    "validate_csrf_token",
    "validate_session",
]
