from __future__ import annotations

from typing import Any, Optional, Sequence

import redis

from ..core.exceptions import StoreUnavailableError
from .live_repository import LiveAttendanceStore


class RedisLiveAttendanceStore(LiveAttendanceStore):
    """One key-space partition (a Redis logical database) of live attendance."""

    def __init__(self, client: redis.Redis, *, scan_count: int = 1000):
        self._client = client
        self._scan_count = int(scan_count)

    def keys_matching(self, pattern: str) -> Sequence[str]:
        # SCAN instead of KEYS so large partitions don't block the server.
        try:
            return [self._as_text(k) for k in self._client.scan_iter(match=pattern, count=self._scan_count)]
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Redis scan failed: {e}") from e

    def get(self, key: str) -> Optional[Any]:
        try:
            value = self._client.get(key)
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Redis get failed for {key}: {e}") from e
        return self._as_text(value) if value is not None else None

    @staticmethod
    def _as_text(value: Any) -> Any:
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return value
