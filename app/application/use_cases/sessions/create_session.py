"""Use case for opening an authenticated session."""

from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.domain.entities import UserSession
from app.infrastructure.repositories import SessionRepository
from app.infrastructure.security import (
    generate_csrf_token,
    generate_session_token,
    hash_session_token,
)
from app.utils import now_utc


def create_session(
    session: Session,
    user_id: str,
    *,
    now: datetime | None = None,
    settings: Settings | None = None,
) -> tuple[str, UserSession]:
    """Persist a new session for ``user_id`` and return ``(token, session)``.

    Only the SHA-256 of ``token`` is stored; the raw token goes to the cookie.
    """

    settings = settings or get_settings()
    token = generate_session_token()
    user_session = UserSession(
        id=hash_session_token(token),
        user_id=user_id,
        expires_at=(now or now_utc()) + timedelta(days=settings.session_duration_days),
        csrf_token=generate_csrf_token(),
    )
    return token, SessionRepository(session).create(user_session)
