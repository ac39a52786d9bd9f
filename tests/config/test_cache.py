"""Tests for _cache.py — ValueCache and key composition."""

from srw_build.config._cache import build_cache_key, ValueCache
from srw_build.config._types import UNDEFINED, DecorationOptions


class TestBuildCacheKey:
    def test_format(self):
        assert build_cache_key("paths", "public", None) == 'cache__0_"paths"__1_"public"__2_null'

    def test_options_serialized(self):
        key = build_cache_key("paths", "public", DecorationOptions(post="app.js"))
        assert key.endswith('__2_{"post": "app.js"}')

    def test_distinct_options_distinct_keys(self):
        square = build_cache_key("paths", "x", DecorationOptions(pre="[", post="]"))
        round_ = build_cache_key("paths", "x", DecorationOptions(pre="(", post=")"))
        assert square != round_

    def test_dots_are_significant(self):
        assert build_cache_key(None, "a.b", None) != build_cache_key(None, "ab", None)

    def test_namespace_position_matters(self):
        assert build_cache_key("a", "b", None) != build_cache_key("b", "a", None)


class TestValueCache:
    def test_miss_is_undefined(self):
        assert ValueCache().get("paths", "public") is UNDEFINED

    def test_put_then_get(self):
        cache = ValueCache()
        cache.put("paths", "public", None, "web/")
        assert cache.get("paths", "public") == "web/"
        assert cache.get("paths", "public", None) == "web/"

    def test_same_object_returned(self):
        cache = ValueCache()
        value = ["a", "b"]
        cache.put("globs", "x", None, value)
        assert cache.get("globs", "x") is value

    def test_options_isolated(self):
        cache = ValueCache()
        cache.put("paths", "x", DecorationOptions(pre="["), "[x")
        cache.put("paths", "x", None, "x")
        assert cache.get("paths", "x") == "x"
        assert cache.get("paths", "x", DecorationOptions(pre="[")) == "[x"
        assert cache.get("paths", "x", DecorationOptions(pre="(")) is UNDEFINED

    def test_falsy_value_reads_as_miss(self):
        cache = ValueCache()
        cache.put("options", "empty", None, "")
        assert cache.get("options", "empty") is UNDEFINED

    def test_len_contains_clear(self):
        cache = ValueCache()
        cache.put("paths", "a", None, "x")
        cache.put("paths", "b", None, "y")
        assert len(cache) == 2
        assert build_cache_key("paths", "a", None) in cache

        cache.clear()

        assert len(cache) == 0
