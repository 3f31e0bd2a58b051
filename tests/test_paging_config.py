"""Tests for PagingConfig construction and loading."""

from __future__ import annotations

import json

import pytest

from pagewindow.errors import ConfigLoadError, ConfigValidationError
from pagewindow.models import CacheMode, CachePolicy
from pagewindow.settings import PagingConfig, load_config


def test_defaults():
    config = PagingConfig()

    assert config.page_size == 20
    assert config.initial_page == 0
    assert config.infinite_scroll is True
    assert config.auto_load_first_page is True
    assert config.invisible_items_threshold == 3
    assert config.cache_policy == CachePolicy.keep_all()
    assert config.compensate_for_trim is False


def test_from_mapping_matches_defaults():
    assert PagingConfig.from_mapping(None) == PagingConfig()


def test_limited_cache_mode_uses_max_cached_items():
    config = PagingConfig.from_mapping(
        {"cache_mode": "limited", "max_cached_items": 30, "page_size": 10}
    )

    assert config.cache_policy == CachePolicy.keep_last(30)
    assert config.page_size == 10


def test_cache_mode_accepts_enum_members():
    config = PagingConfig.from_mapping({"cache_mode": CacheMode.NONE})
    assert config.cache_policy == CachePolicy.keep_none()


@pytest.mark.parametrize(
    "payload",
    [
        {"page_size": 0},
        {"cache_mode": "bogus"},
        {"prefetch_distance": -1},
        {"unknown_option": True},
    ],
)
def test_invalid_mappings_raise_validation_error(payload):
    with pytest.raises(ConfigValidationError):
        PagingConfig.from_mapping(payload)


def test_direct_construction_validates_page_size():
    with pytest.raises(ConfigValidationError):
        PagingConfig(page_size=0)


def test_to_mapping_round_trips():
    config = PagingConfig.from_mapping(
        {"cache_mode": "limited", "max_cached_items": 50, "compensate_for_trim": True}
    )
    assert PagingConfig.from_mapping(config.to_mapping()) == config


class TestLoadConfig:
    def test_missing_file_yields_defaults(self, tmp_path):
        assert load_config(tmp_path / "absent.json") == PagingConfig()

    def test_reads_json_object(self, tmp_path):
        path = tmp_path / "paging.json"
        path.write_text(json.dumps({"page_size": 5, "infinite_scroll": False}), encoding="utf-8")

        config = load_config(path)

        assert config.page_size == 5
        assert config.infinite_scroll is False

    def test_malformed_json_raises_load_error(self, tmp_path):
        path = tmp_path / "paging.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigLoadError):
            load_config(path)

    def test_non_object_payload_raises_load_error(self, tmp_path):
        path = tmp_path / "paging.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ConfigLoadError):
            load_config(path)


class TestCacheWindow:
    def test_window_follows_keep_last_policy(self):
        config = PagingConfig(cache_policy=CachePolicy.keep_last(50))

        assert config.max_cached_items == 50
        assert config.to_mapping()["max_cached_items"] == 50

    def test_other_policies_have_no_window(self):
        assert PagingConfig().max_cached_items is None
        assert PagingConfig(cache_policy=CachePolicy.keep_none()).max_cached_items is None

    def test_window_cannot_be_set_apart_from_policy(self):
        with pytest.raises(TypeError):
            PagingConfig(max_cached_items=30)
