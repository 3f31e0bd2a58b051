"""Tests for CacheEvictor policies."""

from __future__ import annotations

import pytest

from pagewindow.core.cache_evictor import CacheEvictor
from pagewindow.models import CachePolicy


def test_keep_all_never_trims():
    evictor = CacheEvictor(CachePolicy.keep_all(), page_size=10)
    items = list(range(500))

    assert evictor.evict(items) is False
    assert len(items) == 500
    assert evictor.limit() is None


def test_keep_none_retains_most_recent_page():
    evictor = CacheEvictor(CachePolicy.keep_none(), page_size=10)
    items = list(range(25))

    assert evictor.overflow(len(items)) == 15
    assert evictor.evict(items) is True
    assert items == list(range(15, 25))


def test_keep_last_retains_window():
    evictor = CacheEvictor(CachePolicy.keep_last(30), page_size=10)
    items = list(range(50))

    assert evictor.evict(items) is True
    assert items == list(range(20, 50))


def test_under_limit_is_untouched():
    evictor = CacheEvictor(CachePolicy.keep_last(30), page_size=10)
    items = list(range(30))

    assert evictor.evict(items) is False
    assert items == list(range(30))


def test_keep_last_requires_positive_count():
    with pytest.raises(ValueError):
        CachePolicy.keep_last(0)
