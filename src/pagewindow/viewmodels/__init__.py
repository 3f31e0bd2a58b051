"""Pure-Python controller layer (no Qt dependency)."""

from .observer import PagingObserver
from .paging_controller import PagingController
from .signal import Signal

__all__ = ["PagingController", "PagingObserver", "Signal"]
