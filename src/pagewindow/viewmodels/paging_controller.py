"""Incremental paging controller (pure Python, no Qt dependency).

Owns the item list, the page cursor, the paging state machine and the
generation counter used to discard stale fetch results.  Rendering layers read
its state and subscribe to its signals; every mutation goes through the
controller so the key index stays consistent with the list.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Generic, List, Optional, Tuple, TypeVar

from ..application.page_fetch import PageFetcher, fetch_page
from ..core.anchor import AnchorCompensator, AnchorProbe
from ..core.cache_evictor import CacheEvictor
from ..core.key_index import KeyIndex
from ..core.prefetch import within_prefetch_range
from ..errors import FetchFailure
from ..events.bus import Event, EventBus
from ..events.paging_events import (
    ItemsEvictedEvent,
    PageFailedEvent,
    PageLoadedEvent,
    PageRequestedEvent,
)
from ..models import PagingSnapshot, PagingState
from ..settings.config import PagingConfig
from .observer import PagingObserver
from .signal import Signal

T = TypeVar("T")

LOGGER = logging.getLogger(__name__)

_RETRY_FIRST = "first"
_RETRY_NEXT = "next"
_RETRY_PREVIOUS = "previous"


class PagingController(Generic[T]):
    """Page-by-page loader exposing one growing (or bounded) item sequence.

    ``fetcher(page)`` may be a coroutine function or a plain callable; it may
    return a :class:`~pagewindow.application.PageResult` or a sequence.
    ``key_of`` enables O(1) keyed updates and trim compensation; without it
    only predicate-based mutations are available.

    All operations are meant to run on a single event loop.  The only
    suspension points are the awaits on the fetcher; results arriving after a
    :meth:`refresh`, :meth:`restore_from_snapshot` or :meth:`dispose` are
    dropped without touching state.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        config: Optional[PagingConfig] = None,
        *,
        key_of: Optional[Callable[[T], Optional[str]]] = None,
        anchor_probe: Optional[AnchorProbe] = None,
        event_bus: Optional[EventBus] = None,
        source: Optional[str] = None,
    ) -> None:
        self._fetcher = fetcher
        self._config = config or PagingConfig()
        self._key_of = key_of
        self._index: Optional[KeyIndex] = KeyIndex(key_of) if key_of is not None else None
        self._evictor = CacheEvictor(self._config.cache_policy, self._config.page_size)
        self._anchor = AnchorCompensator(anchor_probe, epsilon=self._config.trim_epsilon)
        self._event_bus = event_bus
        self._source = source

        self._items: List[T] = []
        self._state = PagingState.INITIAL
        self._current_page = self._config.initial_page
        self._has_more = True
        self._error: Optional[BaseException] = None
        self._failure: Optional[FetchFailure] = None
        self._retry_kind = _RETRY_FIRST
        self._generation = 0
        self._disposed = False
        self._auto_load_task: Optional[asyncio.Task] = None

        # Signals
        self.changed = Signal()
        self.state_changed = Signal()  # emits (previous, current)
        self.page_requested = Signal()  # emits (page)
        self.page_succeeded = Signal()  # emits (page, items, is_first_page)
        self.page_failed = Signal()  # emits (page, error, is_first_page)
        self.leading_space_changed = Signal()  # emits (leading_space)

        if self._config.auto_load_first_page:
            self._schedule_first_load()

    # -- read surface ------------------------------------------------------

    @property
    def config(self) -> PagingConfig:
        return self._config

    @property
    def state(self) -> PagingState:
        return self._state

    @property
    def items(self) -> Tuple[T, ...]:
        """Return a read-only copy of the current items."""
        return tuple(self._items)

    def item_at(self, index: int) -> Optional[T]:
        """Return the item at *index*, or ``None``."""
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    @property
    def item_count(self) -> int:
        return len(self._items)

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    @property
    def failure(self) -> Optional[FetchFailure]:
        return self._failure

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def leading_space(self) -> float:
        """Extra leading extent the rendering layer should reserve."""
        return self._anchor.leading_space

    @property
    def key_of(self) -> Optional[Callable[[T], Optional[str]]]:
        return self._key_of

    @property
    def auto_load_task(self) -> Optional[asyncio.Task]:
        return self._auto_load_task

    def index_of_key(self, key: str) -> Optional[int]:
        """Return the row currently holding *key*, or ``None``."""
        if self._index is None:
            return None
        return self._index.find(self._items, key)

    # -- observers ---------------------------------------------------------

    def add_observer(self, observer: PagingObserver) -> None:
        self.changed.connect(observer.on_changed)
        self.state_changed.connect(observer.on_state_changed)
        self.page_requested.connect(observer.on_page_requested)
        self.page_succeeded.connect(observer.on_page_succeeded)
        self.page_failed.connect(observer.on_page_failed)
        self.leading_space_changed.connect(observer.on_leading_space_changed)

    def remove_observer(self, observer: PagingObserver) -> None:
        self.changed.disconnect(observer.on_changed)
        self.state_changed.disconnect(observer.on_state_changed)
        self.page_requested.disconnect(observer.on_page_requested)
        self.page_succeeded.disconnect(observer.on_page_succeeded)
        self.page_failed.disconnect(observer.on_page_failed)
        self.leading_space_changed.disconnect(observer.on_leading_space_changed)

    def set_anchor_probe(self, probe: Optional[AnchorProbe]) -> None:
        """Attach the rendering layer's ``probe(key) -> offset`` query."""
        self._anchor.set_probe(probe)

    # -- loading -----------------------------------------------------------

    async def load_first_page(self) -> None:
        """Load the configured initial page, replacing the current items.

        No-op while a load is already in flight.
        """
        if self._disposed or self.is_loading:
            return
        await self._run_first_page()

    async def load_next_page(self) -> None:
        """Append (or, in pagination mode, swap in) the page after the cursor.

        No-op while loading, when no more data is available, or from the
        ``initial``, ``error`` and ``empty`` states.
        """
        if self._disposed or self.is_loading or not self._has_more:
            return
        if self._state in (PagingState.INITIAL, PagingState.ERROR, PagingState.EMPTY):
            return
        await self._run_subsequent_page(self._current_page + 1, backwards=False)

    async def load_previous_page(self) -> None:
        """Swap in the page before the cursor (pagination mode only)."""
        if self._disposed or self._config.infinite_scroll or self.is_loading:
            return
        if self._state in (PagingState.INITIAL, PagingState.ERROR):
            return
        if self._current_page <= self._config.initial_page:
            return
        await self._run_subsequent_page(self._current_page - 1, backwards=True)

    async def refresh(self) -> None:
        """Drop everything and reload the first page.

        Never blocked by an in-flight request: the generation bump makes any
        pending result inert.
        """
        if self._disposed:
            return
        self._generation += 1
        self._items.clear()
        if self._index is not None:
            self._index.clear()
        self._anchor.reset()
        self._has_more = True
        self._current_page = self._config.initial_page
        await self._run_first_page()

    async def retry(self) -> None:
        """Repeat the request that failed; no-op outside the ``error`` state."""
        if self._disposed or self._state is not PagingState.ERROR:
            return
        if not self._items or self._retry_kind == _RETRY_FIRST:
            await self._run_first_page()
        elif self._retry_kind == _RETRY_PREVIOUS:
            await self._run_subsequent_page(self._current_page - 1, backwards=True)
        else:
            await self._run_subsequent_page(self._current_page + 1, backwards=False)

    def should_load_more(self, pixels: float, max_extent: float) -> bool:
        """Return ``True`` when a scroll position warrants :meth:`load_next_page`.

        *pixels* is the current scroll offset and *max_extent* the maximum
        scroll offset along the same axis.  See
        :func:`~pagewindow.core.prefetch.within_prefetch_range` for the
        heuristic and its priority order.
        """
        if self._disposed or not self._config.infinite_scroll:
            return False
        if self.is_loading or not self._has_more:
            return False
        if self._state in (PagingState.INITIAL, PagingState.ERROR, PagingState.EMPTY):
            return False
        return within_prefetch_range(
            pixels=pixels,
            max_extent=max_extent,
            item_count=len(self._items),
            prefetch_item_count=self._config.prefetch_item_count,
            prefetch_distance=self._config.prefetch_distance,
            invisible_items_threshold=self._config.invisible_items_threshold,
        )

    # -- item mutations ----------------------------------------------------

    def update_item(self, new_item: T, where: Optional[Callable[[T], bool]] = None) -> bool:
        """Replace the item sharing *new_item*'s key (or matching *where*).

        Returns ``False`` without notifying when nothing matched.
        """
        if self._disposed:
            return False
        row: Optional[int] = None
        if self._index is not None:
            row = self._index.find(self._items, self._index.key_of(new_item))
        if row is None and where is not None:
            row = self._scan(where)
        if row is None:
            return False

        previous = self._items[row]
        self._items[row] = new_item
        if self._index is not None:
            self._index.replace_at(self._items, row, previous)
        self._notify()
        return True

    def remove_item(
        self,
        key: Optional[str] = None,
        where: Optional[Callable[[T], bool]] = None,
    ) -> bool:
        """Remove the item owning *key* (or the first matching *where*)."""
        if self._disposed:
            return False
        row: Optional[int] = None
        if key is not None and self._index is not None:
            row = self._index.find(self._items, key)
        if row is None and where is not None:
            row = self._scan(where)
        if row is None:
            return False

        removed = self._items.pop(row)
        if self._index is not None:
            self._index.remove_at(self._items, row, removed)
        if not self._items:
            self._set_state(PagingState.EMPTY)
        self._notify()
        return True

    def insert_item(self, index: int, item: T) -> None:
        """Insert *item* at *index*, clamped to ``[0, item_count]``."""
        if self._disposed:
            return
        row = max(0, min(index, len(self._items)))
        self._items.insert(row, item)
        if self._index is not None:
            self._index.insert_at(self._items, row)
        self._leave_empty_state()
        self._notify()

    def append_item(self, item: T) -> None:
        if self._disposed:
            return
        self._items.append(item)
        if self._index is not None:
            self._index.extend(self._items, len(self._items) - 1)
        self._leave_empty_state()
        self._notify()

    # -- snapshots & lifecycle ---------------------------------------------

    def snapshot(self) -> PagingSnapshot:
        return PagingSnapshot(
            items=tuple(self._items),
            state=self._state,
            current_page=self._current_page,
            has_more=self._has_more,
        )

    def restore_from_snapshot(self, snapshot: PagingSnapshot) -> None:
        """Replace live state with *snapshot*, invalidating in-flight fetches."""
        if self._disposed:
            return
        self._generation += 1
        self._items = list(snapshot.items)
        if self._index is not None:
            self._index.rebuild(self._items)
        self._anchor.reset()
        self._current_page = snapshot.current_page
        self._has_more = snapshot.has_more
        self._error = None
        self._failure = None

        state = snapshot.state
        # The request a loading snapshot was waiting on can never land now.
        if state is PagingState.LOADING:
            state = PagingState.LOADED if self._items else PagingState.INITIAL
        elif state is PagingState.LOADING_MORE:
            state = PagingState.LOADED if self._has_more else PagingState.COMPLETED
        self._set_state(state)
        self._notify()

    def dispose(self) -> None:
        """Release items and observers; pending fetches complete inertly."""
        if self._disposed:
            return
        self._generation += 1
        self._disposed = True
        self._items.clear()
        if self._index is not None:
            self._index.clear()
        self._anchor.reset()
        for signal in (
            self.changed,
            self.state_changed,
            self.page_requested,
            self.page_succeeded,
            self.page_failed,
            self.leading_space_changed,
        ):
            signal.disconnect_all()
        LOGGER.debug("Paging controller %s disposed", self._source or hex(id(self)))

    def settle_anchor(self, ticket: Optional[int] = None) -> float:
        """Absorb anchor drift after the rendering layer relaid out a trim.

        Called automatically one loop iteration after a trimming page load,
        which passes the *ticket* of its own capture so a newer trim is left
        for the load that made it.  Rendering layers with their own
        post-layout hook may call it sooner without a ticket.  Returns the
        change applied to :attr:`leading_space`.
        """
        pending = self._anchor.pending
        if self._disposed or pending is None:
            return 0.0
        if ticket is not None and pending.ticket != ticket:
            return 0.0
        if not self._compensation_enabled():
            self._anchor.discard()
            return 0.0
        change = self._anchor.settle(ticket)
        if change:
            self.leading_space_changed.emit(self._anchor.leading_space)
            self._notify()
        return change

    # -- internals ---------------------------------------------------------

    def _schedule_first_load(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            LOGGER.warning(
                "auto_load_first_page is set but no event loop is running; "
                "call load_first_page() explicitly"
            )
            return
        self._auto_load_task = loop.create_task(self.load_first_page())

    async def _run_first_page(self) -> None:
        generation = self._generation
        page = self._config.initial_page
        self._current_page = page
        self._error = None
        self._failure = None
        self._set_state(PagingState.LOADING)
        self._notify()
        self._announce_request(page, is_first_page=True)

        try:
            items, has_more = await fetch_page(self._fetcher, page, self._config.page_size)
        except asyncio.CancelledError as exc:
            if not self._is_stale(generation, page):
                self._record_failure(page, exc, _RETRY_FIRST)
            raise
        except Exception as exc:
            if self._is_stale(generation, page):
                return
            self._record_failure(page, exc, _RETRY_FIRST)
            return
        if self._is_stale(generation, page):
            return

        self._items = items
        if self._index is not None:
            self._index.rebuild(self._items)
        self._anchor.reset()
        self._has_more = has_more
        self._set_state(PagingState.LOADED if items else PagingState.EMPTY)
        self._announce_success(page, items, has_more, is_first_page=True)
        self._notify()

    async def _run_subsequent_page(self, page: int, *, backwards: bool) -> None:
        generation = self._generation
        self._error = None
        self._failure = None
        self._set_state(PagingState.LOADING_MORE)
        self._notify()
        self._announce_request(page, is_first_page=False)

        try:
            items, has_more = await fetch_page(self._fetcher, page, self._config.page_size)
        except asyncio.CancelledError as exc:
            if not self._is_stale(generation, page):
                self._record_failure(page, exc, _RETRY_PREVIOUS if backwards else _RETRY_NEXT)
            raise
        except Exception as exc:
            if self._is_stale(generation, page):
                return
            self._record_failure(page, exc, _RETRY_PREVIOUS if backwards else _RETRY_NEXT)
            return
        if self._is_stale(generation, page):
            return

        self._current_page = page
        ticket: Optional[int] = None
        if self._config.infinite_scroll:
            ticket = self._append_page(items)
        else:
            self._items = items
            if self._index is not None:
                self._index.rebuild(self._items)
            self._anchor.reset()
        self._has_more = has_more
        self._set_state(PagingState.LOADED if has_more else PagingState.COMPLETED)
        self._announce_success(page, items, has_more, is_first_page=False)
        self._notify()

        if ticket is not None:
            # Give the rendering layer one loop iteration to lay out the trim.
            try:
                await asyncio.sleep(0)
            except asyncio.CancelledError:
                self._anchor.discard(ticket)
                raise
            if generation == self._generation:
                self.settle_anchor(ticket)

    def _append_page(self, items: List[T]) -> Optional[int]:
        """Append *items* and evict per policy.

        Returns the anchor capture ticket when a trim was compensated.
        """
        start = len(self._items)
        self._items.extend(items)
        if self._index is not None:
            self._index.extend(self._items, start)

        overflow = self._evictor.overflow(len(self._items))
        if overflow <= 0:
            return None

        ticket: Optional[int] = None
        if self._compensation_enabled():
            anchor_key = self._index.key_of(self._items[overflow])
            ticket = self._anchor.capture(anchor_key)
        self._evictor.evict(self._items)
        if self._index is not None:
            self._index.rebuild(self._items)
        LOGGER.debug("Evicted %d leading items; %d remain", overflow, len(self._items))
        self._publish(ItemsEvictedEvent(source=self._source, count=overflow, remaining=len(self._items)))
        return ticket

    def _compensation_enabled(self) -> bool:
        return (
            self._config.compensate_for_trim
            and self._config.infinite_scroll
            and self._index is not None
            and self._index.reliable
        )

    def _record_failure(self, page: int, exc: BaseException, retry_kind: str) -> None:
        is_first_page = retry_kind == _RETRY_FIRST
        self._error = exc
        self._failure = FetchFailure(page, exc)
        self._retry_kind = retry_kind
        if isinstance(exc, asyncio.CancelledError):
            LOGGER.warning("Load of page %s was cancelled", page)
        else:
            LOGGER.error("Failed to load page %s: %s", page, exc, exc_info=exc)
        self._set_state(PagingState.ERROR)
        self.page_failed.emit(page, exc, is_first_page)
        self._publish(
            PageFailedEvent(source=self._source, page=page, error=exc, is_first_page=is_first_page)
        )
        self._notify()

    def _is_stale(self, generation: int, page: int) -> bool:
        if generation == self._generation and not self._disposed:
            return False
        LOGGER.debug(
            "Dropping stale result for page %s (generation %s != %s)",
            page,
            generation,
            self._generation,
        )
        return True

    def _announce_request(self, page: int, *, is_first_page: bool) -> None:
        self.page_requested.emit(page)
        self._publish(PageRequestedEvent(source=self._source, page=page, is_first_page=is_first_page))

    def _announce_success(
        self, page: int, items: List[T], has_more: bool, *, is_first_page: bool
    ) -> None:
        self.page_succeeded.emit(page, list(items), is_first_page)
        self._publish(
            PageLoadedEvent(
                source=self._source,
                page=page,
                items=list(items),
                is_first_page=is_first_page,
                has_more=has_more,
            )
        )

    def _scan(self, where: Callable[[T], bool]) -> Optional[int]:
        for row, item in enumerate(self._items):
            if where(item):
                return row
        return None

    def _leave_empty_state(self) -> None:
        if self._state is PagingState.EMPTY:
            self._set_state(PagingState.LOADED)

    def _set_state(self, state: PagingState) -> None:
        if state is self._state:
            return
        previous = self._state
        self._state = state
        self.state_changed.emit(previous, state)

    def _notify(self) -> None:
        if not self._disposed:
            self.changed.emit()

    def _publish(self, event: Event) -> None:
        if self._event_bus is not None and not self._disposed:
            self._event_bus.publish(event)


__all__ = ["PagingController"]
