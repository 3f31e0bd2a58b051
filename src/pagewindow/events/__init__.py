from .bus import Event, EventBus, Subscription
from .paging_events import (
    ItemsEvictedEvent,
    PageFailedEvent,
    PageLoadedEvent,
    PageRequestedEvent,
    PagingEvent,
)

__all__ = [
    "Event",
    "EventBus",
    "ItemsEvictedEvent",
    "PageFailedEvent",
    "PageLoadedEvent",
    "PageRequestedEvent",
    "PagingEvent",
    "Subscription",
]
