"""Rate limiting and staff login lockout."""
import math
import os
import threading
import time
from typing import Callable, Dict, List, Optional

from slowapi import Limiter
from slowapi.util import get_remote_address

from volunteerhub.core.exceptions import AccountLockedError


def get_client_ip(request):
    """Get client IP for rate limiting, considering proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # X-Forwarded-For can contain multiple IPs, take the first one
        return forwarded.split(",")[0].strip()

    return get_remote_address(request)


# Uses Redis if REDIS_URL is set, falls back to memory for local dev
limiter = Limiter(
    key_func=get_client_ip,
    default_limits=["100/minute"],
    storage_uri=os.getenv("REDIS_URL", "memory://"),
    strategy="fixed-window"
)

# Kiosk endpoints share the front-desk tablet's IP, so they stay generous
RATE_LIMITS = {
    "kiosk": "120/minute",
    "waiver_public": "30/minute",
    "staff_login": "20/minute",
}


class LoginAttemptTracker:
    """
    Per-identifier failed login counter with a temporary lockout.

    After ``max_attempts`` consecutive failures inside ``lockout_seconds`` the
    identifier is locked for ``lockout_seconds`` from the last failure. A
    successful login clears the record.

    State lives in process memory behind an RLock, like the rest of the
    single-server caches; the clock is injectable so tests can move time.
    """

    def __init__(
        self,
        max_attempts: int,
        lockout_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._max_attempts = max_attempts
        self._lockout_seconds = lockout_seconds
        self._clock = clock
        self._lock = threading.RLock()
        self._failures: Dict[str, List[float]] = {}
        self._locked_until: Dict[str, float] = {}

    @staticmethod
    def _key(identifier: str) -> str:
        return identifier.strip().lower()

    def retry_after(self, identifier: str) -> Optional[int]:
        """Seconds until the identifier unlocks, or None if not locked."""
        key = self._key(identifier)
        with self._lock:
            until = self._locked_until.get(key)
            if until is None:
                return None
            remaining = until - self._clock()
            if remaining <= 0:
                del self._locked_until[key]
                self._failures.pop(key, None)
                return None
            return math.ceil(remaining)

    def ensure_not_locked(self, identifier: str) -> None:
        remaining = self.retry_after(identifier)
        if remaining is not None:
            raise AccountLockedError(remaining)

    def record_failure(self, identifier: str) -> int:
        """Register a failure; returns attempts left before lockout."""
        key = self._key(identifier)
        with self._lock:
            now = self._clock()
            window_start = now - self._lockout_seconds
            attempts = [t for t in self._failures.get(key, []) if t > window_start]
            attempts.append(now)
            self._failures[key] = attempts

            if len(attempts) >= self._max_attempts:
                self._locked_until[key] = now + self._lockout_seconds
                return 0
            return self._max_attempts - len(attempts)

    def record_success(self, identifier: str) -> None:
        key = self._key(identifier)
        with self._lock:
            self._failures.pop(key, None)
            self._locked_until.pop(key, None)

    def reset(self) -> None:
        with self._lock:
            self._failures.clear()
            self._locked_until.clear()


def _build_login_tracker() -> LoginAttemptTracker:
    from volunteerhub.core.config import settings

    return LoginAttemptTracker(
        max_attempts=settings.LOGIN_MAX_ATTEMPTS,
        lockout_seconds=settings.LOGIN_LOCKOUT_MINUTES * 60,
    )


login_tracker = _build_login_tracker()
