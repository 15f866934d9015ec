"""
Rate Limiting Service
In-memory, per-process rate limiting for the admin login form.

Behind several workers each process keeps its own counters.
"""

import time
from collections import defaultdict
from typing import Dict, Tuple, Optional
from dataclasses import dataclass
from threading import Lock

from blog.utils.ip_utils import normalize_ip_for_rate_limit

ADMIN_LOGIN_MAX_ATTEMPTS = 5
ADMIN_LOGIN_WINDOW_SECONDS = 15 * 60


@dataclass
class RateLimitEntry:
    """Request count for one key inside its current window."""

    count: int
    window_start: float


class RateLimiter:
    """
    Fixed-window rate limiter keyed by an arbitrary string.

    Thread-safe; sync routes run in a threadpool.
    """

    def __init__(self):
        self._lock = Lock()
        self._requests: Dict[str, RateLimitEntry] = defaultdict(
            lambda: RateLimitEntry(0, 0)
        )
        self._operation_count = 0  # Operations since last cleanup

    def is_allowed(
        self, key: str, max_requests: int, window_seconds: int
    ) -> Tuple[bool, Optional[int]]:
        """
        Check and count one request for `key`.

        Args:
            key: Bucket identifier (e.g. "admin_login:127.0.0.1")
            max_requests: Requests allowed per window
            window_seconds: Window length in seconds

        Returns:
            Tuple of (is_allowed, retry_after_seconds)
        """
        with self._lock:
            self._operation_count += 1

            if self._operation_count >= 100 and len(self._requests) > 1000:
                self._cleanup_old_entries_unlocked(max_age_seconds=7200)

            current_time = time.time()

            entry = self._requests[key]

            if entry.window_start < current_time - window_seconds:
                entry.count = 0
                entry.window_start = current_time

            if entry.count >= max_requests:
                retry_after = int(entry.window_start + window_seconds - current_time)
                return False, max(1, retry_after)

            entry.count += 1
            return True, None

    def reset(self, key: Optional[str] = None):
        """Forget one bucket, or every bucket when key is None."""
        with self._lock:
            if key is None:
                self._requests.clear()
                self._operation_count = 0
            else:
                self._requests.pop(key, None)

    def _cleanup_old_entries_unlocked(self, max_age_seconds: int = 3600):
        """Drop stale buckets. Caller must hold the lock."""
        current_time = time.time()
        stale = [
            key
            for key, entry in self._requests.items()
            if current_time - entry.window_start > max_age_seconds
        ]
        for key in stale:
            del self._requests[key]
        self._operation_count = 0


login_rate_limiter = RateLimiter()


def admin_login_key(ip: str) -> str:
    return f"admin_login:{normalize_ip_for_rate_limit(ip)}"


def check_admin_login_rate_limit(ip: str) -> Tuple[bool, Optional[int]]:
    """
    Rate limit admin login attempts.

    Limit: 5 attempts per IP per 15 minutes.

    Returns:
        Tuple of (is_allowed, retry_after_seconds)
    """
    return login_rate_limiter.is_allowed(
        key=admin_login_key(ip),
        max_requests=ADMIN_LOGIN_MAX_ATTEMPTS,
        window_seconds=ADMIN_LOGIN_WINDOW_SECONDS,
    )


def reset_admin_login_rate_limit(ip: str) -> None:
    """Clear the attempt counter after a successful login."""
    login_rate_limiter.reset(admin_login_key(ip))
