"""Tests for the write-once instance cache."""

import pytest

from core.cache import InstanceCache
from core.errors import AlreadyResolved


class TestInstanceCache:

    def test_get_missing_returns_none(self):
        assert InstanceCache().get("echo") is None

    def test_put_then_get(self):
        cache = InstanceCache()
        handler = object()
        cache.put("echo", handler)
        assert cache.get("echo") is handler
        assert "echo" in cache
        assert len(cache) == 1

    def test_overwrite_is_rejected(self):
        cache = InstanceCache()
        first = object()
        cache.put("echo", first)
        with pytest.raises(AlreadyResolved):
            cache.put("echo", object())
        assert cache.get("echo") is first

    def test_none_cannot_be_cached(self):
        cache = InstanceCache()
        with pytest.raises(ValueError):
            cache.put("echo", None)
        assert "echo" not in cache

    def test_names_in_resolution_order(self):
        cache = InstanceCache()
        cache.put("b", 1)
        cache.put("a", 2)
        assert cache.names() == ["b", "a"]
