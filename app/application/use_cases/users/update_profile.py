"""Use case for editing the profile fields shown on the settings page."""

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository

from .validators import ensure_valid_display_name, ensure_valid_timezone, ensure_valid_week_start


def update_profile(
    session: Session,
    user_id: str,
    *,
    display_name: str,
    timezone: str,
    week_start: str,
) -> User:
    """Validate every field first, then persist them in one update."""

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise ValueError("User not found")

    user.display_name = ensure_valid_display_name(display_name)
    user.timezone = ensure_valid_timezone(timezone)
    user.week_start = ensure_valid_week_start(week_start)
    return repository.update(user)
