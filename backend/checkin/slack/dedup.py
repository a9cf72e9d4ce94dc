import time
from collections import OrderedDict
from collections.abc import Callable


class DedupCache:
    """Remembers added keys for ``ttl`` seconds.

    Keeps at most ``capacity`` keys; the oldest are evicted first. State
    lives in process memory, so a restart forgets everything.
    """

    def __init__(
        self,
        ttl: float,
        capacity: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.ttl = ttl
        self.capacity = capacity
        self.clock = clock
        self._seen: OrderedDict[str, float] = OrderedDict()

    def __len__(self) -> int:
        return len(self._seen)

    def _evict_expired(self, now: float) -> None:
        while self._seen:
            key, expires_at = next(iter(self._seen.items()))
            if expires_at > now:
                break
            del self._seen[key]

    def contains(self, key: str) -> bool:
        self._evict_expired(self.clock())
        return key in self._seen

    def add(self, key: str) -> None:
        now = self.clock()
        self._evict_expired(now)
        self._seen[key] = now + self.ttl
        self._seen.move_to_end(key)
        while len(self._seen) > self.capacity:
            self._seen.popitem(last=False)
