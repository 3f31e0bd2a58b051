"""Synchronous signal primitives used as the controller's observer bus.

Provides ``Signal``, the explicit subscribe/unsubscribe registry behind every
controller notification.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

_logger = logging.getLogger(__name__)


class Signal:
    """Explicit subscribe/unsubscribe registry invoked synchronously.

    Handlers run in connection order on the emitting thread before
    :meth:`emit` returns.  Exceptions raised by individual handlers are caught
    and logged so that one failing handler does not prevent subsequent
    handlers from executing.
    """

    def __init__(self) -> None:
        self._handlers: list[Callable] = []

    def connect(self, handler: Callable) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def disconnect(self, handler: Callable) -> bool:
        """Remove *handler*; returns ``False`` if it was not connected."""
        try:
            self._handlers.remove(handler)
        except ValueError:
            return False
        return True

    def disconnect_all(self) -> None:
        self._handlers.clear()

    def emit(self, *args: Any, **kwargs: Any) -> None:
        # Snapshot so handlers may (dis)connect while being notified.
        for handler in list(self._handlers):
            try:
                handler(*args, **kwargs)
            except Exception:
                _logger.exception("Signal handler %r failed", handler)

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

