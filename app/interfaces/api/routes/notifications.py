"""Endpoints for configuring and testing reminder notifications."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    EncryptionUnavailableError,
    get_relay_url,
    register_push_subscription,
    send_test_notification,
    update_notification_preferences,
)
from app.config import get_settings
from app.domain.entities import (
    NO_REMINDER_SERVICE,
    PUSH_SUBSCRIPTION_MISSING,
    RELAY_NOT_CONFIGURED,
    User,
)
from app.infrastructure.database import get_db
from app.infrastructure.notifications import NotificationDispatcher
from app.interfaces.api.dependencies import (
    get_current_user,
    get_notification_dispatcher,
    require_csrf,
)
from app.interfaces.api.schemas import (
    NotificationPreferencesUpdate,
    OperationResult,
    PushSubscriptionRequest,
    RelayUrlRead,
    UserRead,
    VapidPublicKeyRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

_EXPIRED_SUBSCRIPTION_MESSAGE = (
    "Push subscription expired. Please re-enable notifications in your browser."
)

# Delivery errors caused by incomplete preferences rather than the backend.
_CONFIGURATION_ERRORS = {
    PUSH_SUBSCRIPTION_MISSING: "No push subscription found",
    RELAY_NOT_CONFIGURED: "Ntfy not configured",
    NO_REMINDER_SERVICE: "No notification service configured",
}


@router.get("/vapid-public-key", response_model=VapidPublicKeyRead)
def read_vapid_public_key() -> VapidPublicKeyRead:
    """Expose the application server key the browser needs to subscribe."""

    return VapidPublicKeyRead(public_key=get_settings().vapid_public_key)


@router.post(
    "/subscribe",
    response_model=OperationResult,
    dependencies=[Depends(require_csrf)],
)
def subscribe(
    payload: PushSubscriptionRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> OperationResult:
    try:
        register_push_subscription(db, current_user.id, payload.subscription)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return OperationResult()


@router.patch(
    "/preferences",
    response_model=UserRead,
    dependencies=[Depends(require_csrf)],
)
def update_preferences(
    payload: NotificationPreferencesUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserRead:
    try:
        user = update_notification_preferences(
            db,
            current_user.id,
            enabled=payload.reminder_enabled,
            service=payload.reminder_service,
            reminder_time=payload.reminder_time,
            relay_url=payload.relay_url,
        )
    except EncryptionUnavailableError as exc:
        logger.error("Relay URL not stored for user %s: %s", current_user.id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return UserRead.from_entity(user)


@router.get("/relay-url", response_model=RelayUrlRead)
def read_relay_url(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> RelayUrlRead:
    try:
        relay_url = get_relay_url(db, current_user.id)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    return RelayUrlRead(relay_url=relay_url)


@router.post(
    "/test",
    response_model=OperationResult,
    dependencies=[Depends(require_csrf)],
)
def send_test(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> OperationResult:
    """Send a test notification through the user's configured backend."""

    try:
        result = send_test_notification(db, current_user.id, dispatcher)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if result.subscription_expired:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=_EXPIRED_SUBSCRIPTION_MESSAGE
        )
    if result.error in _CONFIGURATION_ERRORS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=_CONFIGURATION_ERRORS[result.error]
        )
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=result.error or "Failed to send test notification",
        )
    return OperationResult()
