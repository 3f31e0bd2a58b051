"""Algorithms composed by :class:`~pagewindow.viewmodels.PagingController`."""

from .anchor import AnchorCompensator, AnchorProbe
from .cache_evictor import CacheEvictor
from .key_index import KeyIndex
from .prefetch import within_prefetch_range

__all__ = [
    "AnchorCompensator",
    "AnchorProbe",
    "CacheEvictor",
    "KeyIndex",
    "within_prefetch_range",
]
