"""Observer base with one no-op hook per controller signal."""

from __future__ import annotations

from typing import Any, Sequence

from ..models import PagingState


class PagingObserver:
    """Subclass and override the hooks you care about.

    Attach with :meth:`PagingController.add_observer`; every hook is then
    invoked synchronously by the controller before the triggering operation
    returns.
    """

    def on_changed(self) -> None:
        """State mutated; re-read whatever you display."""

    def on_state_changed(self, previous: PagingState, current: PagingState) -> None:
        pass

    def on_page_requested(self, page: int) -> None:
        pass

    def on_page_succeeded(self, page: int, items: Sequence[Any], is_first_page: bool) -> None:
        pass

    def on_page_failed(self, page: int, error: BaseException, is_first_page: bool) -> None:
        pass

    def on_leading_space_changed(self, leading_space: float) -> None:
        pass
