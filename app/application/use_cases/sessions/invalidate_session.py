"""Use cases for revoking sessions."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from app.infrastructure.repositories import SessionRepository
from app.utils import now_utc

logger = logging.getLogger(__name__)


def invalidate_session(session: Session, session_id: str) -> None:
    SessionRepository(session).delete(session_id)


def invalidate_user_sessions(session: Session, user_id: str) -> int:
    """Delete every session of ``user_id``.

    Callers that want to keep the acting device signed in must create a new session
    afterwards.
    """

    deleted = SessionRepository(session).delete_for_user(user_id)
    logger.info("Invalidated %s session(s) for user %s", deleted, user_id)
    return deleted


def delete_expired_sessions(session: Session, *, now: datetime | None = None) -> int:
    """Purge expired rows. Validation already rejects them, this only reclaims space."""

    deleted = SessionRepository(session).delete_expired(now or now_utc())
    if deleted:
        logger.info("Purged %s expired session(s)", deleted)
    return deleted
