"""Key → position lookup maintained alongside the controller's item list."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

LOGGER = logging.getLogger(__name__)

KeyFunc = Callable[[Any], Optional[str]]


class KeyIndex:
    """Maintain a ``key`` → row mapping for a list of items.

    Hot paths (tail append, single insert/remove, in-place replace) update the
    mapping incrementally.  Whenever the key function yields an empty key or a
    key already owned by another row the index marks itself *unreliable*:
    :meth:`position` then returns ``None`` and callers fall back to a linear
    scan.  Unreliable indexes are maintained by full rebuilds, which also
    restore reliability once the conflicting rows are gone.
    """

    def __init__(self, key_of: KeyFunc) -> None:
        self._key_of = key_of
        self._positions: Dict[str, int] = {}
        self._reliable = True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def reliable(self) -> bool:
        """Return ``True`` when every current key is unique and non-empty."""

        return self._reliable

    def key_of(self, item: Any) -> Optional[str]:
        return self._key_of(item)

    def position(self, key: Optional[str]) -> Optional[int]:
        """Return the row owning *key*, or ``None`` when unknown or unsafe."""

        if not key or not self._reliable:
            return None
        return self._positions.get(key)

    def find(self, items: Sequence[Any], key: Optional[str]) -> Optional[int]:
        """Resolve *key* against *items*, scanning when the index is unsafe."""

        if not key:
            return None
        if self._reliable:
            return self._positions.get(key)
        for row, item in enumerate(items):
            if self._key_of(item) == key:
                return row
        return None

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, key: object) -> bool:
        return key in self._positions

    def as_dict(self) -> Dict[str, int]:
        return dict(self._positions)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def clear(self) -> None:
        self._positions = {}
        self._reliable = True

    def rebuild(self, items: Sequence[Any]) -> None:
        """Recompute the mapping from scratch."""

        refreshed: Dict[str, int] = {}
        reliable = True
        for row, item in enumerate(items):
            key = self._key_of(item)
            if not key or key in refreshed:
                reliable = False
                continue
            refreshed[key] = row
        self._positions = refreshed
        if reliable != self._reliable:
            LOGGER.debug("Key index reliability changed to %s", reliable)
        self._reliable = reliable

    def extend(self, items: List[Any], start_row: int) -> None:
        """Register ``items[start_row:]`` after a tail append."""

        if not self._reliable:
            self.rebuild(items)
            return
        for row in range(start_row, len(items)):
            key = self._key_of(items[row])
            if not key or key in self._positions:
                self.rebuild(items)
                return
            self._positions[key] = row

    def remove_at(self, items: List[Any], row: int, removed: Any) -> None:
        """Update the mapping after ``removed`` was popped from *row*."""

        if not self._reliable:
            self.rebuild(items)
            return
        self._positions.pop(self._key_of(removed), None)
        for shifted in range(row, len(items)):
            self._positions[self._key_of(items[shifted])] = shifted

    def insert_at(self, items: List[Any], row: int) -> None:
        """Update the mapping after a new item was inserted at *row*."""

        key = self._key_of(items[row])
        if not self._reliable or not key or key in self._positions:
            self.rebuild(items)
            return
        for shifted in range(row + 1, len(items)):
            self._positions[self._key_of(items[shifted])] = shifted
        self._positions[key] = row

    def replace_at(self, items: List[Any], row: int, previous: Any) -> None:
        """Update the mapping after ``items[row]`` replaced *previous*."""

        old_key = self._key_of(previous)
        new_key = self._key_of(items[row])
        if old_key == new_key and self._reliable:
            return
        if not self._reliable or not new_key or self._positions.get(new_key, row) != row:
            self.rebuild(items)
            return
        if self._positions.get(old_key) == row:
            del self._positions[old_key]
        self._positions[new_key] = row


__all__ = ["KeyFunc", "KeyIndex"]
