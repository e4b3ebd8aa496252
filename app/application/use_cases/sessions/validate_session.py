"""Use case for validating and sliding a session token."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.domain.entities import SessionValidation
from app.infrastructure.repositories import SessionRepository
from app.infrastructure.security import hash_session_token
from app.utils import ensure_utc, now_utc

logger = logging.getLogger(__name__)


def validate_session(
    session: Session,
    token: str | None,
    *,
    now: datetime | None = None,
    settings: Settings | None = None,
) -> SessionValidation:
    """Resolve ``token`` to its session and owner.

    Expired sessions are deleted on sight. Sessions with less than the refresh
    threshold left are extended to a full lifetime and reported as ``fresh`` so the
    caller re-issues the cookies. The CSRF token is kept across refreshes.
    """

    if not token:
        return SessionValidation.invalid()

    settings = settings or get_settings()
    current = ensure_utc(now) if now is not None else now_utc()
    repository = SessionRepository(session)
    session_id = hash_session_token(token)

    found = repository.get_with_user(session_id)
    if found is None:
        return SessionValidation.invalid()

    user_session, user = found
    if current >= user_session.expires_at:
        repository.delete(session_id)
        logger.info("Deleted expired session for user %s", user.id)
        return SessionValidation.invalid()

    refresh_at = user_session.expires_at - timedelta(days=settings.session_refresh_threshold_days)
    if current < refresh_at:
        return SessionValidation(session=user_session, user=user, fresh=False)

    expires_at = current + timedelta(days=settings.session_duration_days)
    repository.update_expiration(session_id, expires_at)
    return SessionValidation(
        session=replace(user_session, expires_at=expires_at), user=user, fresh=True
    )
