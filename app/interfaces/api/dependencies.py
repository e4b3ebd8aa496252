"""FastAPI dependency utilities."""

from functools import lru_cache

from fastapi import Depends, HTTPException, Request, status

from app.application.use_cases.sessions import validate_csrf_token
from app.config import get_settings
from app.domain.entities import User, UserSession
from app.infrastructure.notifications import NotificationDispatcher
from app.infrastructure.rate_limit import get_client_ip
from app.infrastructure.security_events import SecurityEventType, log_security_event


def get_current_user(request: Request) -> User:
    """Return the user resolved by the session middleware or reject with 401."""

    user: User | None = getattr(request.state, "user", None)
    if user is None:
        log_security_event(
            SecurityEventType.UNAUTHORIZED_ACCESS,
            get_client_ip(request),
            message=f"{request.method} {request.url.path}",
        )
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user


def get_current_session(
    request: Request, _: User = Depends(get_current_user)
) -> UserSession:
    return request.state.session


def require_csrf(
    request: Request,
    user_session: UserSession = Depends(get_current_session),
) -> UserSession:
    """Reject state-changing requests that do not echo the session's CSRF token."""

    provided = request.headers.get(get_settings().csrf_header_name)
    if not validate_csrf_token(user_session.csrf_token, provided):
        log_security_event(
            SecurityEventType.CSRF_FAILED,
            get_client_ip(request),
            user_id=user_session.user_id,
            message=f"{request.method} {request.url.path}",
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid CSRF token")
    return user_session


@lru_cache
def get_notification_dispatcher() -> NotificationDispatcher:
    return NotificationDispatcher()


__all__ = [
    "get_current_session",
    "get_current_user",
    "get_notification_dispatcher",
    "require_csrf",
]
