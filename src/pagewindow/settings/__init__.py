"""Configuration for paging controllers."""

from .config import PagingConfig, load_config
from .schema import CONFIG_SCHEMA, DEFAULT_CONFIG, merge_with_defaults

__all__ = [
    "CONFIG_SCHEMA",
    "DEFAULT_CONFIG",
    "PagingConfig",
    "load_config",
    "merge_with_defaults",
]
