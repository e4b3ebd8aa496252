"""Use case for self-service signup."""

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash
from app.utils import DEFAULT_TIMEZONE, now_utc

from .validators import ensure_valid_email, ensure_valid_password


def register_user(
    session: Session,
    *,
    email: str,
    password: str,
    email_verified: bool = True,
) -> User:
    """Create a new user ensuring unique email addresses."""

    normalized_email = ensure_valid_email(email)
    ensure_valid_password(password)

    repository = UserRepository(session)
    if repository.get_by_email(normalized_email):
        raise ValueError("Email already registered")

    user = User(
        id=None,
        email=normalized_email,
        password_hash=get_password_hash(password),
        email_verified=email_verified,
        timezone=DEFAULT_TIMEZONE,
        created_at=now_utc(),
    )
    return repository.create(user)
