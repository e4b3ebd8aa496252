"""Use case for updating the timezone used to localize reminders."""

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository

from .validators import ensure_valid_timezone


def update_timezone(session: Session, user_id: str, tz_name: str) -> User:
    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise ValueError("User not found")

    user.timezone = ensure_valid_timezone(tz_name)
    return repository.update(user)
