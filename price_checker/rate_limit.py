import time
from collections import deque
from collections.abc import Callable


class RateLimiter:
    """Per-client sliding window: at most `limit` hits in any `window` seconds."""

    def __init__(
        self,
        limit: int = 15,
        window: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        max_clients: int = 10000,
    ) -> None:
        self._limit = limit
        self._window = window
        self._clock = clock
        self._max_clients = max_clients
        self._hits: dict[str, deque[float]] = {}

    def _prune(self, hits: deque[float], now: float) -> None:
        while hits and now - hits[0] >= self._window:
            hits.popleft()

    def _evict(self, now: float) -> None:
        if len(self._hits) <= self._max_clients:
            return
        for key in list(self._hits):
            self._prune(self._hits[key], now)
            if not self._hits[key]:
                del self._hits[key]

    def hit(self, client: str) -> bool:
        """Record a request. Returns False when the client is over the limit."""
        now = self._clock()
        hits = self._hits.setdefault(client, deque())
        self._prune(hits, now)
        if len(hits) >= self._limit:
            return False
        hits.append(now)
        self._evict(now)
        return True

