"""Paging configuration object and its file/mapping loaders."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from jsonschema import ValidationError

from ..config import (
    DEFAULT_INITIAL_PAGE,
    DEFAULT_INVISIBLE_ITEMS_THRESHOLD,
    DEFAULT_MAX_CACHED_ITEMS,
    DEFAULT_PAGE_SIZE,
    TRIM_COMPENSATION_EPSILON,
)
from ..errors import ConfigLoadError, ConfigValidationError
from ..models import CacheMode, CachePolicy
from .schema import merge_with_defaults

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PagingConfig:
    """Immutable options for a :class:`PagingController`."""

    page_size: int = DEFAULT_PAGE_SIZE
    # ``False`` selects pagination-by-replacement: each page replaces the
    # previous one and no eviction happens.
    infinite_scroll: bool = True
    initial_page: int = DEFAULT_INITIAL_PAGE
    auto_load_first_page: bool = True
    cache_policy: CachePolicy = field(default_factory=CachePolicy.keep_all)
    prefetch_item_count: int = 0
    prefetch_distance: float = 0.0
    invisible_items_threshold: int = DEFAULT_INVISIBLE_ITEMS_THRESHOLD
    compensate_for_trim: bool = False
    trim_epsilon: float = TRIM_COMPENSATION_EPSILON

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ConfigValidationError("page_size must be at least 1")
        if self.trim_epsilon < 0:
            raise ConfigValidationError("trim_epsilon must not be negative")

    @property
    def max_cached_items(self) -> Optional[int]:
        """Item window of a ``keep_last`` policy, ``None`` for other policies."""

        if self.cache_policy.mode is CacheMode.LIMITED:
            return self.cache_policy.max_items
        return None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "PagingConfig":
        """Build a config from JSON-style keys, validating against the schema."""

        try:
            merged = merge_with_defaults(data)
        except ValidationError as exc:
            raise ConfigValidationError(exc.message) from exc

        mode = CacheMode(merged["cache_mode"])
        max_cached = merged["max_cached_items"]
        if mode is CacheMode.LIMITED:
            policy = CachePolicy.keep_last(max_cached)
        elif mode is CacheMode.NONE:
            policy = CachePolicy.keep_none()
        else:
            policy = CachePolicy.keep_all()

        return cls(
            page_size=merged["page_size"],
            infinite_scroll=merged["infinite_scroll"],
            initial_page=merged["initial_page"],
            auto_load_first_page=merged["auto_load_first_page"],
            cache_policy=policy,
            prefetch_item_count=merged["prefetch_item_count"],
            prefetch_distance=float(merged["prefetch_distance"]),
            invisible_items_threshold=merged["invisible_items_threshold"],
            compensate_for_trim=merged["compensate_for_trim"],
            trim_epsilon=float(merged["trim_epsilon"]),
        )

    def to_mapping(self) -> dict[str, Any]:
        """Return the JSON-style representation accepted by :meth:`from_mapping`."""

        max_cached = self.max_cached_items or DEFAULT_MAX_CACHED_ITEMS
        return {
            "page_size": self.page_size,
            "infinite_scroll": self.infinite_scroll,
            "initial_page": self.initial_page,
            "auto_load_first_page": self.auto_load_first_page,
            "cache_mode": self.cache_policy.mode.value,
            "max_cached_items": max_cached,
            "prefetch_item_count": self.prefetch_item_count,
            "prefetch_distance": self.prefetch_distance,
            "invisible_items_threshold": self.invisible_items_threshold,
            "compensate_for_trim": self.compensate_for_trim,
            "trim_epsilon": self.trim_epsilon,
        }


def load_config(path: Path) -> PagingConfig:
    """Read a JSON configuration file, falling back to defaults if missing."""

    if not path.exists():
        LOGGER.debug("No paging config at %s; using defaults", path)
        return PagingConfig.from_mapping(None)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigLoadError(f"Cannot read {path}: {exc}") from exc
    if payload is not None and not isinstance(payload, dict):
        raise ConfigLoadError(f"{path} must contain a JSON object")
    return PagingConfig.from_mapping(payload)


__all__ = ["PagingConfig", "load_config"]
