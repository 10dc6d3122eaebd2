import time
from collections import deque


class RateLimiter:
    """Sliding one-minute window of attempts per key."""

    def __init__(self, limit_per_minute: int) -> None:
        self.limit = limit_per_minute
        self._windows: dict[str, deque[float]] = {}

    def _purge(self, now: float) -> None:
        # Drop expired entries (older than 60s) and keys whose window emptied
        for key in list(self._windows):
            window = self._windows[key]
            while window and window[0] <= now - 60:
                window.popleft()
            if not window:
                del self._windows[key]

    def is_allowed(self, key: str) -> bool:
        now = time.monotonic()
        self._purge(now)

        window = self._windows.setdefault(key, deque())
        if len(window) >= self.limit:
            return False

        window.append(now)
        return True

    def tracked_keys(self) -> int:
        return len(self._windows)

    def forget(self, key: str) -> None:
        self._windows.pop(key, None)

    def reset(self) -> None:
        self._windows.clear()
