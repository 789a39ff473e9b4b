"""Sliding-window admission control for verification requests."""

import logging
import math
import threading
import time
from collections import deque
from typing import Callable, Deque, Optional

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    """Current monotonic time in milliseconds."""
    return time.monotonic() * 1000.0


class AdmissionGate:
    """Sliding-window rate limiter.

    Keeps the timestamps of admitted requests in arrival order. Expired
    timestamps are always a prefix of the window, so trimming pops from the
    front until the oldest one is back inside the window.
    """

    def __init__(
        self,
        max_requests: int = 5,
        window_size_ms: float = 60_000,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize the gate.

        Args:
            max_requests: Requests admitted per window
            window_size_ms: Window length in milliseconds
            clock: Millisecond clock, monotonic time by default
        """
        self.max_requests = max_requests
        self.window_size_ms = window_size_ms
        self._clock = clock or monotonic_ms
        self._admitted: Deque[float] = deque()
        self._lock = threading.Lock()

    def _trim(self, now: float) -> None:
        while self._admitted and now - self._admitted[0] >= self.window_size_ms:
            self._admitted.popleft()

    def try_admit(self) -> bool:
        """Admit a request if the window has room for it.

        Returns:
            True if admitted, False if the caller must wait
        """
        with self._lock:
            now = self._clock()
            self._trim(now)
            if len(self._admitted) < self.max_requests:
                self._admitted.append(now)
                return True

        logger.info(f"🚦 Admission denied: {self.max_requests} requests already in window")
        return False

    def time_until_next_slot(self) -> float:
        """Milliseconds until the oldest admitted request leaves the window."""
        with self._lock:
            if not self._admitted:
                return 0.0
            now = self._clock()
            return max(0.0, self.window_size_ms - (now - self._admitted[0]))

    def retry_after_seconds(self) -> int:
        """Wait time rounded up to whole seconds."""
        return math.ceil(self.time_until_next_slot() / 1000.0)

    def __len__(self) -> int:
        with self._lock:
            return len(self._admitted)
