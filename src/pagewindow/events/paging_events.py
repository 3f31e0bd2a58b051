"""Telemetry events published by a paging controller."""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .bus import Event


@dataclass(kw_only=True)
class PagingEvent(Event):
    source: Optional[str] = None


@dataclass(kw_only=True)
class PageRequestedEvent(PagingEvent):
    page: int
    is_first_page: bool = False


@dataclass(kw_only=True)
class PageLoadedEvent(PagingEvent):
    page: int
    items: List[Any] = field(default_factory=list)
    is_first_page: bool = False
    has_more: bool = True


@dataclass(kw_only=True)
class PageFailedEvent(PagingEvent):
    page: int
    error: BaseException
    is_first_page: bool = False


@dataclass(kw_only=True)
class ItemsEvictedEvent(PagingEvent):
    count: int
    remaining: int
