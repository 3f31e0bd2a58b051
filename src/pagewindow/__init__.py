"""Incremental paging controller with bounded caching and anchor compensation."""

from .application import PageFetcher, PageResult
from .core import AnchorCompensator, CacheEvictor, KeyIndex
from .errors import ConfigLoadError, ConfigValidationError, FetchFailure, PagingError
from .events import EventBus
from .models import CacheMode, CachePolicy, PagingSnapshot, PagingState
from .settings import PagingConfig, load_config
from .viewmodels import PagingController, PagingObserver, Signal

__all__ = [
    "AnchorCompensator",
    "CacheEvictor",
    "CacheMode",
    "CachePolicy",
    "ConfigLoadError",
    "ConfigValidationError",
    "EventBus",
    "FetchFailure",
    "KeyIndex",
    "PageFetcher",
    "PageResult",
    "PagingConfig",
    "PagingController",
    "PagingError",
    "PagingObserver",
    "PagingSnapshot",
    "PagingState",
    "Signal",
    "load_config",
]

__version__ = "0.1.0"
