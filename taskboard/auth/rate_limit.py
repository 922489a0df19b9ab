"""Sliding-window throttle for login attempts.

Each client key keeps a log of attempt times. An attempt is rejected once the key
already has ``max_attempts`` entries inside the trailing window. State lives in
memory behind a lock and resets on restart. Keys whose attempts have all expired
are swept at most once per window.
"""

import logging
import math
import threading
import time
from collections import deque
from collections.abc import Callable

from fastapi import Request

from taskboard.core import config
from taskboard.core.errors import RateLimited

logger = logging.getLogger(__name__)


class LoginThrottle:
    def __init__(
        self,
        max_attempts: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_attempts <= 0:
            raise ValueError("max_attempts must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self._clock = clock
        self._attempts: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def _evict(self, attempts: deque[float], now: float) -> None:
        while attempts and now - attempts[0] >= self.window_seconds:
            attempts.popleft()

    def _sweep(self, now: float) -> None:
        if now - self._last_sweep < self.window_seconds:
            return
        for key in list(self._attempts):
            attempts = self._attempts[key]
            self._evict(attempts, now)
            if not attempts:
                del self._attempts[key]
        self._last_sweep = now

    def hit(self, key: str) -> None:
        """Record an attempt for ``key`` or raise ``RateLimited`` if over the limit."""
        with self._lock:
            now = self._clock()
            self._sweep(now)

            attempts = self._attempts.get(key)
            if attempts is not None:
                self._evict(attempts, now)
            if not attempts:
                attempts = self._attempts[key] = deque()

            if len(attempts) >= self.max_attempts:
                retry_after = max(1, math.ceil(self.window_seconds - (now - attempts[0])))
                logger.warning("Login throttled for %s; retry after %ss", key, retry_after)
                raise RateLimited(retry_after)

            attempts.append(now)

    def remaining(self, key: str) -> int:
        with self._lock:
            attempts = self._attempts.get(key)
            if not attempts:
                return self.max_attempts
            self._evict(attempts, self._clock())
            if not attempts:
                del self._attempts[key]
                return self.max_attempts
            return self.max_attempts - len(attempts)

    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._attempts)

    def reset(self) -> None:
        with self._lock:
            self._attempts.clear()


def get_client_identifier(request: Request, trust_forwarded_for: bool | None = None) -> str:
    if trust_forwarded_for is None:
        trust_forwarded_for = config.TRUST_FORWARDED_FOR

    if trust_forwarded_for:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return f"ip:{forwarded_for.split(',')[0].strip()}"

    if request.client:
        return f"ip:{request.client.host}"

    return "ip:unknown"
