"""Rate Limiter — process-local hourly hit counters per viewer.

Invariants:
    - Counters are keyed by (viewer uid, UTC hour bucket); a new hour starts at 0
    - Stale buckets are pruned on every write, so memory stays bounded by the
      number of active viewers
    - All access guarded by a threading.Lock (the only shared mutable state)

Design Decisions:
    - In-process counters: one gateway process per deployment unit; a shared
      store can replace this class behind the same three methods
"""

import threading
from datetime import datetime

from gateway.core.rate_quota import hour_bucket, remaining_hits


class RateLimiter:
    def __init__(self, hourly_limit: int = 150):
        self.hourly_limit = hourly_limit
        self._hits: dict[tuple[int, datetime], int] = {}
        self._lock = threading.Lock()

    def used(self, uid: int, now: datetime) -> int:
        with self._lock:
            return self._hits.get((uid, hour_bucket(now)), 0)

    def remaining(self, uid: int, now: datetime) -> int:
        return remaining_hits(self.hourly_limit, self.used(uid, now))

    def is_exhausted(self, uid: int, now: datetime) -> bool:
        return self.remaining(uid, now) <= 0

    def record(self, uid: int, now: datetime) -> int:
        """Count one hit; returns the hits used in the current hour."""
        bucket = hour_bucket(now)
        with self._lock:
            for key in [k for k in self._hits if k[1] != bucket]:
                del self._hits[key]
            self._hits[(uid, bucket)] = self._hits.get((uid, bucket), 0) + 1
            return self._hits[(uid, bucket)]

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
