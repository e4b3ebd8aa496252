"""Fixed-window attempt counters guarding the authentication endpoints."""

from __future__ import annotations

import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from starlette.requests import Request


@dataclass
class RateLimitEntry:
    count: int
    reset_time: float


@runtime_checkable
class RateLimitStore(Protocol):
    """Storage backend for attempt counters.

    ``increment`` must be atomic with respect to concurrent callers.
    """

    def get(self, key: str) -> RateLimitEntry | None:
        ...

    def increment(self, key: str, now: float, window: float) -> RateLimitEntry:
        ...

    def delete(self, key: str) -> None:
        ...

    def purge_expired(self, now: float) -> int:
        ...

    def clear(self) -> None:
        ...


class InMemoryRateLimitStore:
    """Process local store; sync endpoints run in a thread pool, hence the lock."""

    def __init__(self) -> None:
        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> RateLimitEntry | None:
        with self._lock:
            entry = self._entries.get(key)
            return RateLimitEntry(entry.count, entry.reset_time) if entry else None

    def increment(self, key: str, now: float, window: float) -> RateLimitEntry:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or now > entry.reset_time:
                entry = RateLimitEntry(count=1, reset_time=now + window)
                self._entries[key] = entry
            else:
                entry.count += 1
            return RateLimitEntry(entry.count, entry.reset_time)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def purge_expired(self, now: float) -> int:
        with self._lock:
            expired = [key for key, entry in self._entries.items() if now > entry.reset_time]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class RateLimiter:
    """Allow ``max_attempts`` per key inside a fixed window of ``window_seconds``.

    The window starts at the first attempt and is not extended by later ones.
    """

    def __init__(
        self,
        name: str,
        max_attempts: int,
        window_seconds: float,
        *,
        store: RateLimitStore | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.name = name
        self.max_attempts = max_attempts
        self.window_seconds = float(window_seconds)
        self._store: RateLimitStore = store if store is not None else InMemoryRateLimitStore()
        self._clock = clock

    def is_rate_limited(self, key: str) -> bool:
        entry = self._store.get(key)
        if entry is None:
            return False
        if self._clock() > entry.reset_time:
            self._store.delete(key)
            return False
        return entry.count >= self.max_attempts

    def record_attempt(self, key: str) -> bool:
        """Count an attempt; return ``True`` when this attempt reached the limit."""

        entry = self._store.increment(key, self._clock(), self.window_seconds)
        return entry.count == self.max_attempts

    def reset(self, key: str) -> None:
        self._store.delete(key)

    def get_reset_time(self, key: str) -> int:
        """Seconds (rounded up) until ``key`` may try again, ``0`` when unrestricted."""

        entry = self._store.get(key)
        if entry is None:
            return 0
        remaining = entry.reset_time - self._clock()
        if remaining <= 0:
            return 0
        return math.ceil(remaining)

    def cleanup(self) -> int:
        return self._store.purge_expired(self._clock())

    def clear(self) -> None:
        self._store.clear()


login_rate_limiter = RateLimiter("login", 5, 15 * 60)
signup_rate_limiter = RateLimiter("signup", 3, 60 * 60)
verification_rate_limiter = RateLimiter("verification", 10, 60 * 60)

ALL_RATE_LIMITERS: tuple[RateLimiter, ...] = (
    login_rate_limiter,
    signup_rate_limiter,
    verification_rate_limiter,
)


def verification_key(client_ip: str, user_id: str) -> str:
    """Key verification attempts by IP and account so victims are not locked out."""

    return f"{client_ip}:{user_id}"


def get_client_ip(request: Request) -> str:
    """Return the best guess of the caller's IP address."""

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


__all__ = [
    "ALL_RATE_LIMITERS",
    "InMemoryRateLimitStore",
    "RateLimitEntry",
    "RateLimitStore",
    "RateLimiter",
    "get_client_ip",
    "login_rate_limiter",
    "signup_rate_limiter",
    "verification_key",
    "verification_rate_limiter",
]
