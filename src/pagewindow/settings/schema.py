"""Schema helpers for paging configuration mappings."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Mapping

from jsonschema import Draft202012Validator

from ..config import (
    DEFAULT_INITIAL_PAGE,
    DEFAULT_INVISIBLE_ITEMS_THRESHOLD,
    DEFAULT_MAX_CACHED_ITEMS,
    DEFAULT_PAGE_SIZE,
    TRIM_COMPENSATION_EPSILON,
)

CONFIG_SCHEMA: dict[str, Any] = {
    "$id": "pagewindow/paging-config.schema.json",
    "type": "object",
    "properties": {
        "page_size": {"type": "integer", "minimum": 1},
        "infinite_scroll": {"type": "boolean"},
        "initial_page": {"type": "integer"},
        "auto_load_first_page": {"type": "boolean"},
        "cache_mode": {"type": "string", "enum": ["all", "none", "limited"]},
        "max_cached_items": {"type": "integer", "minimum": 1},
        "prefetch_item_count": {"type": "integer", "minimum": 0},
        "prefetch_distance": {"type": "number", "minimum": 0},
        "invisible_items_threshold": {"type": "integer", "minimum": 0},
        "compensate_for_trim": {"type": "boolean"},
        "trim_epsilon": {"type": "number", "minimum": 0},
    },
    "additionalProperties": False,
}

DEFAULT_CONFIG: dict[str, Any] = {
    "page_size": DEFAULT_PAGE_SIZE,
    "infinite_scroll": True,
    "initial_page": DEFAULT_INITIAL_PAGE,
    "auto_load_first_page": True,
    "cache_mode": "all",
    "max_cached_items": DEFAULT_MAX_CACHED_ITEMS,
    "prefetch_item_count": 0,
    "prefetch_distance": 0.0,
    "invisible_items_threshold": DEFAULT_INVISIBLE_ITEMS_THRESHOLD,
    "compensate_for_trim": False,
    "trim_epsilon": TRIM_COMPENSATION_EPSILON,
}

_validator = Draft202012Validator(CONFIG_SCHEMA)


def merge_with_defaults(data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_CONFIG` and validate the result."""

    merged = deepcopy(DEFAULT_CONFIG)
    if data:
        for key, value in data.items():
            # Accept the enum spelling used by ``CacheMode`` as well.
            if key == "cache_mode" and hasattr(value, "value"):
                value = value.value
            merged[key] = value
    _validator.validate(merged)
    return merged


__all__ = ["CONFIG_SCHEMA", "DEFAULT_CONFIG", "merge_with_defaults"]
