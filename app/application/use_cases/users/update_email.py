"""Use case for moving an account to a new email address."""

import logging

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import verify_password

from .validators import ensure_valid_email

logger = logging.getLogger(__name__)


def update_email(session: Session, *, user_id: str, new_email: str, password: str) -> User:
    """Change the sign-in address after re-checking the password.

    The new address starts unverified.
    """

    normalized_email = ensure_valid_email(new_email)

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise ValueError("User not found")

    if not password or not verify_password(password, user.password_hash):
        raise ValueError("Invalid password")

    if repository.get_by_email(normalized_email) is not None:
        raise ValueError("Email already in use")

    user.email = normalized_email
    user.email_verified = False
    updated = repository.update(user)
    logger.info("Email changed for user %s", user_id)
    return updated
