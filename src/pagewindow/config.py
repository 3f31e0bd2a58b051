"""Default configuration values for pagewindow."""

from __future__ import annotations

from typing import Final

DEFAULT_PAGE_SIZE: Final[int] = 20
DEFAULT_INITIAL_PAGE: Final[int] = 0

# Window size used when ``cache_mode`` is ``"limited"`` and no explicit
# ``max_cached_items`` was configured.
DEFAULT_MAX_CACHED_ITEMS: Final[int] = 1000

# The fallback prefetch trigger fires when the viewport is within
# ``invisible_items_threshold`` items of the end, assuming each item is
# roughly ``INVISIBLE_ITEM_EXTENT`` units long.
DEFAULT_INVISIBLE_ITEMS_THRESHOLD: Final[int] = 3
INVISIBLE_ITEM_EXTENT: Final[float] = 100.0

# Anchor drift smaller than this is treated as layout noise.
TRIM_COMPENSATION_EPSILON: Final[float] = 0.5
