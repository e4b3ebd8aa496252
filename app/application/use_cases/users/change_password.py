"""Use case for changing the password of a signed-in user."""

from sqlalchemy.orm import Session

from app.application.use_cases.sessions import create_session, invalidate_user_sessions
from app.domain.entities import UserSession
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash, verify_password

from .validators import ensure_valid_password


def change_password(
    session: Session,
    *,
    user_id: str,
    current_password: str,
    new_password: str,
) -> tuple[str, UserSession]:
    """Replace the password and sign out every device.

    A new session is returned for the acting device so it stays signed in.
    """

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise ValueError("User not found")

    if not verify_password(current_password, user.password_hash):
        raise ValueError("Current password is incorrect")

    ensure_valid_password(new_password)
    user.password_hash = get_password_hash(new_password)
    repository.update(user)

    invalidate_user_sessions(session, user_id)
    return create_session(session, user_id)
