"""Per-host request spacing."""
from __future__ import annotations

import logging
import threading
import time

logger = logging.getLogger(__name__)


class HostRateLimiter:
    """Spaces requests to the same host at least ``delay`` seconds apart.

    The first request to a host passes straight through. Later callers reserve
    the next free slot under the lock and then sleep outside it, so waiting on
    one host never holds up another.
    """

    def __init__(self, delay: float, clock=time.monotonic, sleep=time.sleep) -> None:
        self.delay = delay
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last: dict[str, float] = {}

    def admit(self, host: str) -> None:
        now = self._clock()
        with self._lock:
            previous = self._last.get(host)
            if previous is None or now >= previous + self.delay:
                self._last[host] = now
                return
            deadline = previous + self.delay
            self._last[host] = deadline
        remaining = deadline - now
        logger.debug("Throttling %s for %.3fs", host, remaining)
        self._sleep(remaining)


__all__ = ["HostRateLimiter"]
