"""Use cases for the email verification code flow."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.domain.entities import User
from app.infrastructure.email import send_verification_email
from app.infrastructure.repositories import UserRepository, VerificationCodeRepository
from app.infrastructure.security import constant_time_equals, generate_verification_code
from app.utils import now_utc

from .authenticate_user import AuthenticationStatus

logger = logging.getLogger(__name__)


def issue_verification_code(
    session: Session,
    user: User,
    *,
    now: datetime | None = None,
    settings: Settings | None = None,
) -> str:
    """Store a fresh code for ``user`` and mail it. Returns the code."""

    settings = settings or get_settings()
    ttl_minutes = settings.verification_code_ttl_minutes
    code = generate_verification_code()
    expires_at = (now or now_utc()) + timedelta(minutes=ttl_minutes)
    VerificationCodeRepository(session).create(user.id, code, expires_at)

    if not send_verification_email(user.email, code, ttl_minutes=ttl_minutes):
        logger.warning("Verification email for user %s could not be delivered", user.id)
    return code


def confirm_verification_code(
    session: Session,
    user_id: str,
    code: str,
    *,
    now: datetime | None = None,
) -> AuthenticationStatus:
    """Check ``code`` against the latest one issued to ``user_id``.

    On success the user is marked verified and all their codes are removed.
    """

    codes = VerificationCodeRepository(session)
    latest = codes.get_latest(user_id)
    if latest is None:
        return AuthenticationStatus.VERIFICATION_NOT_FOUND

    if (now or now_utc()) > latest.expires_at:
        return AuthenticationStatus.VERIFICATION_EXPIRED

    if not constant_time_equals(latest.code, (code or "").strip()):
        return AuthenticationStatus.INVALID_VERIFICATION_CODE

    UserRepository(session).mark_email_verified(user_id)
    codes.delete_for_user(user_id)
    return AuthenticationStatus.SUCCESS
