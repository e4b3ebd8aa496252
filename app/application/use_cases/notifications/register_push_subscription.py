"""Use case for storing a browser push subscription."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from app.infrastructure.repositories import UserRepository

from .validators import is_valid_push_subscription

logger = logging.getLogger(__name__)


def register_push_subscription(
    session: Session, user_id: str, subscription: Mapping[str, Any]
) -> None:
    if not is_valid_push_subscription(subscription):
        raise ValueError("Invalid push subscription format")

    stored = {
        "endpoint": subscription["endpoint"],
        "expirationTime": subscription.get("expirationTime"),
        "keys": {
            "p256dh": subscription["keys"]["p256dh"],
            "auth": subscription["keys"]["auth"],
        },
    }
    UserRepository(session).set_push_subscription(user_id, stored)
    logger.info("Push subscription registered for user %s", user_id)
