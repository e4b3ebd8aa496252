"""Use case for authenticating a user."""

from enum import Enum, auto

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash, needs_rehash, verify_password

from .validators import normalize_email


class AuthenticationStatus(Enum):
    """Possible outcomes when attempting to authenticate a user."""

    SUCCESS = auto()
    INVALID_CREDENTIALS = auto()
    VERIFICATION_REQUIRED = auto()
    VERIFICATION_NOT_FOUND = auto()
    INVALID_VERIFICATION_CODE = auto()
    VERIFICATION_EXPIRED = auto()


def authenticate_user(
    session: Session,
    email: str,
    password: str,
    *,
    require_verified_email: bool = False,
) -> tuple[User | None, AuthenticationStatus]:
    """Return the authentication result along with the user when possible.

    Unknown addresses and wrong passwords share ``INVALID_CREDENTIALS``. When
    ``require_verified_email`` is set an unverified user is returned with
    ``VERIFICATION_REQUIRED`` and has to confirm a code before a session is issued.
    """

    repository = UserRepository(session)
    user = repository.get_by_email(normalize_email(email or ""))

    if not user:
        return None, AuthenticationStatus.INVALID_CREDENTIALS

    if not verify_password(password, user.password_hash):
        return user, AuthenticationStatus.INVALID_CREDENTIALS

    if needs_rehash(user.password_hash):
        user.password_hash = get_password_hash(password)
        user = repository.update(user)

    if require_verified_email and not user.email_verified:
        return user, AuthenticationStatus.VERIFICATION_REQUIRED

    return user, AuthenticationStatus.SUCCESS
