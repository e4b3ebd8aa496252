from .auth import (
    ChangePasswordRequest,
    LoginRequest,
    SessionRead,
    SignupRequest,
    SignupResponse,
)
from .notification import (
    NotificationPreferencesUpdate,
    OperationResult,
    PushSubscriptionRequest,
    RelayUrlRead,
    VapidPublicKeyRead,
)
from .user import EmailUpdate, ProfileUpdate, TimezoneUpdate, UserRead

__all__ = [
    "ChangePasswordRequest",
    "EmailUpdate",
    "LoginRequest",
    "NotificationPreferencesUpdate",
    "OperationResult",
    "ProfileUpdate",
    "PushSubscriptionRequest",
    "RelayUrlRead",
    "SessionRead",
    "SignupRequest",
    "SignupResponse",
    "TimezoneUpdate",
    "UserRead",
    "VapidPublicKeyRead",
]
