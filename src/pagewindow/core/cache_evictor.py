"""Bounded-memory eviction for infinite-scroll item lists."""

from __future__ import annotations

from typing import Any, List

from ..models import CacheMode, CachePolicy


class CacheEvictor:
    """Decide how many leading items to discard after an append.

    ``keep_all`` never trims, ``keep_none`` keeps the most recent page and
    ``keep_last(n)`` keeps the most recent *n* items.
    """

    def __init__(self, policy: CachePolicy, page_size: int) -> None:
        self._policy = policy
        self._page_size = page_size

    @property
    def policy(self) -> CachePolicy:
        return self._policy

    def limit(self) -> int | None:
        """Return the maximum retained length, or ``None`` when unbounded."""

        if self._policy.mode is CacheMode.NONE:
            return self._page_size
        if self._policy.mode is CacheMode.LIMITED:
            return self._policy.max_items
        return None

    def overflow(self, length: int) -> int:
        """Return how many leading items a list of *length* must shed."""

        limit = self.limit()
        if limit is None or length <= limit:
            return 0
        return length - limit

    def evict(self, items: List[Any]) -> bool:
        """Trim *items* in place and report whether anything was discarded."""

        count = self.overflow(len(items))
        if count <= 0:
            return False
        del items[:count]
        return True


__all__ = ["CacheEvictor"]
