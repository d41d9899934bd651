"""Bounded, newest-first history of diff results."""

from __future__ import annotations

from collections import deque
from typing import Iterator, Optional

from .models import DiffResult

DEFAULT_HISTORY_LIMIT = 100


class DiffHistory:
    """
    Keeps the most recent results of a caller's comparisons.

    The engine never touches a history; callers add results to it.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self.limit = limit
        self._results: deque[DiffResult] = deque(maxlen=limit)

    def add(self, result: DiffResult) -> DiffResult:
        """Record a result as the newest entry, evicting the oldest if full."""
        self._results.appendleft(result)
        return result

    def get(self, result_id: str) -> Optional[DiffResult]:
        for result in self._results:
            if result.id == result_id:
                return result
        return None

    def remove(self, result_id: str) -> bool:
        """Remove a result by id. Returns True if it was present."""
        result = self.get(result_id)
        if result is None:
            return False
        self._results.remove(result)
        return True

    def clear(self):
        self._results.clear()

    @property
    def latest(self) -> Optional[DiffResult]:
        return self._results[0] if self._results else None

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[DiffResult]:
        return iter(self._results)
