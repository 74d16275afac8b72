"""
In-memory fixed-window rate limiter for contact submissions.

One instance is created at application startup and shared by every request
in the process. Counters are process-local and best effort; they are not
shared between instances and do not survive a restart.
"""

import time
from threading import Lock
from typing import Callable, Dict, Mapping, Optional

import structlog

from studio_site.domain.models import RateLimitDecision, RateLimitEntry

logger = structlog.get_logger()

UNKNOWN_CLIENT = "unknown"


def _now_ms() -> int:
    return int(time.time() * 1000)


class RateLimiter:
    """
    Fixed-window counter keyed by opaque strings (e.g. "contact:minute:<ip>").

    A key's window starts on its first hit and lasts window_ms. Once
    now >= reset_at the entry is replaced, not incremented. Bursts at window
    boundaries are possible.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], int]] = None,
        sweep_threshold: int = 10_000,
    ):
        self._clock = clock or _now_ms
        self._sweep_threshold = sweep_threshold
        self._store: Dict[str, RateLimitEntry] = {}
        self._lock = Lock()

    def check(self, key: str, window_ms: int, max_count: int) -> RateLimitDecision:
        """Count one hit against key; denied hits do not mutate the entry."""
        now = self._clock()
        with self._lock:
            if len(self._store) > self._sweep_threshold:
                self._sweep_locked(now)

            entry = self._store.get(key)
            if entry is None or entry.reset_at <= now:
                entry = RateLimitEntry(count=1, reset_at=now + window_ms)
                self._store[key] = entry
                return RateLimitDecision(
                    allowed=True, remaining=max_count - 1, reset_at=entry.reset_at
                )

            if entry.count >= max_count:
                return RateLimitDecision(allowed=False, remaining=0, reset_at=entry.reset_at)

            entry.count += 1
            return RateLimitDecision(
                allowed=True, remaining=max_count - entry.count, reset_at=entry.reset_at
            )

    def sweep(self) -> int:
        """Drop expired entries. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            return self._sweep_locked(now)

    def _sweep_locked(self, now: int) -> int:
        expired = [key for key, entry in self._store.items() if entry.reset_at <= now]
        for key in expired:
            del self._store[key]
        if expired:
            logger.debug("rate_limit_sweep", removed=len(expired), remaining=len(self._store))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


def get_client_key(headers: Mapping[str, str]) -> str:
    """
    Identify the client for rate limiting.

    First X-Forwarded-For hop, else X-Real-IP, else "unknown". Clients that
    send neither header share the "unknown" bucket.
    """
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip() or UNKNOWN_CLIENT
    real_ip = headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return UNKNOWN_CLIENT
