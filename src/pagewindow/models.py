"""Value types shared by the paging controller and its helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple


class PagingState(Enum):
    """Lifecycle of a paging controller."""

    INITIAL = "initial"
    LOADING = "loading"
    LOADED = "loaded"
    LOADING_MORE = "loadingMore"
    ERROR = "error"
    EMPTY = "empty"
    COMPLETED = "completed"

    @property
    def is_loading(self) -> bool:
        return self in (PagingState.LOADING, PagingState.LOADING_MORE)


class CacheMode(Enum):
    ALL = "all"
    NONE = "none"
    LIMITED = "limited"


@dataclass(frozen=True)
class CachePolicy:
    """How many fetched items survive an append in infinite-scroll mode.

    Use the factory methods rather than the constructor:
    :meth:`keep_all`, :meth:`keep_none` (most recent page only) and
    :meth:`keep_last`.
    """

    mode: CacheMode = CacheMode.ALL
    max_items: Optional[int] = None

    def __post_init__(self) -> None:
        if self.mode is CacheMode.LIMITED:
            if self.max_items is None or self.max_items < 1:
                raise ValueError("keep_last requires a positive item count")

    @classmethod
    def keep_all(cls) -> "CachePolicy":
        return cls(CacheMode.ALL)

    @classmethod
    def keep_none(cls) -> "CachePolicy":
        return cls(CacheMode.NONE)

    @classmethod
    def keep_last(cls, count: int) -> "CachePolicy":
        return cls(CacheMode.LIMITED, count)


@dataclass(frozen=True)
class PagingSnapshot:
    """Immutable capture of controller state at one point in time."""

    items: Tuple[Any, ...]
    state: PagingState
    current_page: int
    has_more: bool


@dataclass(frozen=True)
class AnchorRecord:
    """Anchor key and its pre-trim offset, tagged with the capture ticket."""

    key: str
    offset: float
    ticket: int = 0


__all__ = ["AnchorRecord", "CacheMode", "CachePolicy", "PagingSnapshot", "PagingState"]
