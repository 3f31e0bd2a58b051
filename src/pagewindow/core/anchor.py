"""Viewport-anchor compensation for leading-item trims.

When the cache evictor drops items from the head of the list, everything that
is still rendered slides toward the start of the viewport.  The compensator
records where an anchor item sat before the trim, asks again once the
rendering layer has settled, and grows a leading spacer by the distance the
anchor moved.  It corrects a single point only; the layout is trusted to place
everything else relative to it.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..config import TRIM_COMPENSATION_EPSILON
from ..models import AnchorRecord

LOGGER = logging.getLogger(__name__)

AnchorProbe = Callable[[str], Optional[float]]


class AnchorCompensator:
    """Track a leading-space reservation that keeps an anchor item in place."""

    def __init__(
        self,
        probe: Optional[AnchorProbe] = None,
        *,
        epsilon: float = TRIM_COMPENSATION_EPSILON,
    ) -> None:
        self._probe = probe
        self._epsilon = epsilon
        self._leading_space = 0.0
        self._pending: Optional[AnchorRecord] = None
        self._tickets = 0

    @property
    def probe(self) -> Optional[AnchorProbe]:
        return self._probe

    def set_probe(self, probe: Optional[AnchorProbe]) -> None:
        """Attach the rendering layer's position query (or detach it)."""

        self._probe = probe
        self._pending = None

    @property
    def leading_space(self) -> float:
        return self._leading_space

    @property
    def pending(self) -> Optional[AnchorRecord]:
        return self._pending

    def capture(self, key: Optional[str]) -> Optional[int]:
        """Record the current offset of *key* ahead of a trim.

        Returns the ticket identifying this capture, or ``None`` when no probe
        is attached or the item is not on screen.  A failed capture leaves an
        earlier pending one in place.
        """

        if self._probe is None or not key:
            return None
        before = self._probe(key)
        if before is None:
            return None
        self._tickets += 1
        self._pending = AnchorRecord(key=key, offset=float(before), ticket=self._tickets)
        return self._tickets

    def settle(self, ticket: Optional[int] = None) -> float:
        """Re-probe the pending anchor and absorb its drift.

        With *ticket* given, only the capture carrying that ticket is settled;
        a newer capture is left pending for its own owner.

        Returns the change applied to :attr:`leading_space` (``0.0`` when
        nothing was pending, the anchor vanished or the drift is below
        epsilon).
        """

        record = self._pending
        if record is None or not self._owns(record, ticket):
            return 0.0
        self._pending = None
        if self._probe is None:
            return 0.0
        after = self._probe(record.key)
        if after is None:
            return 0.0
        delta = float(after) - record.offset
        if abs(delta) < self._epsilon:
            return 0.0
        previous = self._leading_space
        self._leading_space = max(0.0, previous - delta)
        LOGGER.debug(
            "Anchor %s drifted by %.2f; leading space %.2f -> %.2f",
            record.key,
            delta,
            previous,
            self._leading_space,
        )
        return self._leading_space - previous

    def discard(self, ticket: Optional[int] = None) -> None:
        """Forget a pending capture without touching the reservation."""

        if self._pending is not None and self._owns(self._pending, ticket):
            self._pending = None

    def reset(self) -> None:
        self._pending = None
        self._leading_space = 0.0

    @staticmethod
    def _owns(record: AnchorRecord, ticket: Optional[int]) -> bool:
        return ticket is None or record.ticket == ticket


__all__ = ["AnchorCompensator", "AnchorProbe"]
