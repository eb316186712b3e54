from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence


class LiveAttendanceStore(Protocol):
    """Narrow read contract over the same-day key-value store."""

    def keys_matching(self, pattern: str) -> Sequence[str]:
        raise NotImplementedError

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError
