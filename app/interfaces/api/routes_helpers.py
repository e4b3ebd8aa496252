"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from app.infrastructure.rate_limit import RateLimiter
from app.infrastructure.security_events import SecurityEventType, log_security_event


def raise_rate_limited(limiter: RateLimiter, key: str, action: str) -> None:
    """Abort with 429 and a ``Retry-After`` matching the limiter window."""

    retry_after = max(limiter.get_reset_time(key), 1)
    minutes = -(-retry_after // 60)
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=f"Too many {action} attempts. Please try again in {minutes} minutes.",
        headers={"Retry-After": str(retry_after)},
    )


def record_failed_attempt(
    limiter: RateLimiter,
    key: str,
    client_ip: str,
    event_type: SecurityEventType,
    *,
    email: str | None = None,
    user_id: str | None = None,
) -> None:
    """Count a failure; only the attempt that reaches the limit is logged."""

    if limiter.record_attempt(key):
        log_security_event(
            event_type,
            client_ip,
            email=email,
            user_id=user_id,
            message=f"Rate limit exceeded, resets in {limiter.get_reset_time(key)}s",
        )


__all__ = ["raise_rate_limited", "record_failed_attempt"]
