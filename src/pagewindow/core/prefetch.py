"""Scroll-position heuristics that decide when to request the next page.

These are approximations: item extents vary, so the item-count trigger
estimates the first visible row as ``scroll_fraction * item_count`` rather
than measuring it.
"""

from __future__ import annotations

import math

from ..config import INVISIBLE_ITEM_EXTENT


def within_prefetch_range(
    *,
    pixels: float,
    max_extent: float,
    item_count: int,
    prefetch_item_count: int = 0,
    prefetch_distance: float = 0.0,
    invisible_items_threshold: int = 3,
) -> bool:
    """Return ``True`` when the viewport is close enough to the end.

    Triggers are tried in priority order: item count, then pixel distance,
    then the default ``invisible_items_threshold`` fallback.  Only the first
    configured trigger is consulted.
    """

    if prefetch_item_count > 0:
        if max_extent <= 0:
            fraction = 1.0
        else:
            fraction = min(max(pixels / max_extent, 0.0), 1.0)
        approximate_visible = math.floor(item_count * fraction)
        remaining = item_count - approximate_visible
        return remaining <= prefetch_item_count

    if prefetch_distance > 0:
        return pixels >= max_extent - prefetch_distance

    threshold = invisible_items_threshold * INVISIBLE_ITEM_EXTENT
    return pixels >= max_extent - threshold


__all__ = ["within_prefetch_range"]
