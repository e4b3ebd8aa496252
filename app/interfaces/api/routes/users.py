"""Endpoints for the signed-in user's profile."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.users import (
    issue_verification_code,
    update_email,
    update_profile,
    update_timezone,
)
from app.config import get_settings
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_user, require_csrf
from app.interfaces.api.schemas import EmailUpdate, ProfileUpdate, TimezoneUpdate, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.from_entity(current_user)


@router.put(
    "/me",
    response_model=UserRead,
    dependencies=[Depends(require_csrf)],
)
def change_profile(
    payload: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserRead:
    try:
        user = update_profile(
            db,
            current_user.id,
            display_name=payload.display_name,
            timezone=payload.timezone,
            week_start=payload.week_start,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return UserRead.from_entity(user)


@router.put(
    "/me/timezone",
    response_model=UserRead,
    dependencies=[Depends(require_csrf)],
)
def change_timezone(
    payload: TimezoneUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserRead:
    """Set the zone used to localize the reminder time."""

    try:
        user = update_timezone(db, current_user.id, payload.timezone)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return UserRead.from_entity(user)


@router.put(
    "/me/email",
    response_model=UserRead,
    dependencies=[Depends(require_csrf)],
)
def change_email(
    payload: EmailUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserRead:
    """Move the account to a new address; it must be verified again."""

    try:
        user = update_email(
            db,
            user_id=current_user.id,
            new_email=payload.new_email,
            password=payload.password,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if get_settings().email_verification_required:
        issue_verification_code(db, user)
    return UserRead.from_entity(user)
