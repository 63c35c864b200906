"""Per-client rolling-window rate limiter"""
import logging
import time
from collections import deque
from typing import Callable, Deque, Dict

from .errors import RateLimitError

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """
    Allows at most `max_requests` accepted requests per `window_seconds`
    for each client key.

    Only accepted requests are recorded, so a rejected call neither consumes
    quota nor pushes the window forward. Keys are client network origins;
    clients sharing one address share one quota.
    """

    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._accepted: Dict[str, Deque[float]] = {}

    def _prune(self, key: str, now: float) -> int:
        """Drop expired timestamps for `key` and return how many remain"""
        timestamps = self._accepted.get(key)
        if timestamps is None:
            return 0
        while timestamps and now - timestamps[0] >= self.window_seconds:
            timestamps.popleft()
        if not timestamps:
            del self._accepted[key]
        return len(timestamps)

    def _sweep(self, now: float) -> None:
        # Newest timestamp is last; a key whose newest entry expired is empty
        expired = [
            key for key, timestamps in self._accepted.items()
            if now - timestamps[-1] >= self.window_seconds
        ]
        for key in expired:
            del self._accepted[key]

    def acquire(self, key: str) -> None:
        """Record one request for `key` or raise RateLimitError"""
        now = self._clock()
        self._sweep(now)
        if self._prune(key, now) >= self.max_requests:
            logger.warning(f"Rate limit exceeded for client {key}")
            raise RateLimitError()
        self._accepted.setdefault(key, deque()).append(now)

    def remaining(self, key: str) -> int:
        return max(self.max_requests - self._prune(key, self._clock()), 0)

    @property
    def tracked_clients(self) -> int:
        return len(self._accepted)

    def reset(self) -> None:
        self._accepted.clear()
