"""Tests for _resolver.py — ConfigResolver.resolve / concat and helpers."""

from unittest.mock import patch

import pytest

from srw_build.config._resolver import ConfigResolver, as_text, build_index, decorate
from srw_build.config._store import ConfigStore
from srw_build.config._types import DecorationOptions, InvalidOptionsError, ResolutionError


def _resolver(tree) -> ConfigResolver:
    return ConfigResolver(ConfigStore.from_mapping(tree))


class TestHelpers:
    def test_build_index(self):
        assert build_index("paths", "public.styles") == "paths.public.styles"
        assert build_index(None, "public") == "public"
        assert build_index("", "public") == "public"

    def test_decorate_scalar(self):
        assert decorate("mid", DecorationOptions(pre="[", post="]")) == "[mid]"

    def test_decorate_list(self):
        assert decorate(["a", "b"], DecorationOptions(pre="[", post="]")) == ["[a]", "[b]"]

    def test_decorate_without_options(self):
        value = ["a"]
        assert decorate(value, None) is value

    def test_decorate_mapping_untouched(self):
        assert decorate({"a": "b"}, DecorationOptions(pre="x")) == {"a": "b"}

    def test_as_text(self):
        assert as_text("a") == "a"
        assert as_text(["a", "b"]) == "a,b"
        assert as_text(3) == "3"


class TestResolve:
    def test_round_trip(self):
        assert _resolver({"a": {"b": "x"}}).resolve(None, "a.b") == "x"

    def test_namespace(self):
        resolver = _resolver({"paths": {"public": {"styles": "web/css/"}}})
        assert resolver.resolve("paths", "public.styles") == "web/css/"

    def test_second_call_served_from_cache(self):
        resolver = _resolver({"a": {"b": "x"}})

        with patch.object(resolver.store, "lookup", wraps=resolver.store.lookup) as lookup:
            first = resolver.resolve(None, "a.b")
            second = resolver.resolve(None, "a.b")

        assert first == second == "x"
        assert lookup.call_count == 1

    def test_mutating_returned_list_does_not_change_cache(self):
        resolver = _resolver({"paths": {"components": ["a/", "b/"]}})

        first = resolver.resolve("paths", "components")
        first.append("injected/")
        second = resolver.resolve("paths", "components")
        second.append("again/")

        assert resolver.resolve("paths", "components") == ["a/", "b/"]

    def test_mutating_returned_mapping_does_not_change_cache(self):
        resolver = _resolver({"paths": {"public": {"root": "web/", "list": ["x"]}}})

        tree = resolver.resolve("paths", "public")
        tree["root"] = "changed/"
        tree["list"].append("y")

        assert resolver.resolve("paths", "public") == {"root": "web/", "list": ["x"]}

    def test_invalid_options_raise_config_error(self):
        resolver = _resolver({"x": "mid"})
        with pytest.raises(InvalidOptionsError, match="pre"):
            resolver.resolve(None, "x", {"pre": 1})

    def test_placeholders_expanded(self):
        resolver = _resolver({"a": "foo", "b": "prefix-${a}-suffix"})
        assert resolver.resolve(None, "b") == "prefix-foo-suffix"

    def test_multi_hop(self):
        assert _resolver({"a": "${b}", "b": "${c}", "c": "leaf"}).resolve(None, "a") == "leaf"

    def test_cycle_terminates(self):
        result = _resolver({"a": "${b}", "b": "${a}"}).resolve(None, "a")
        assert "${" in result

    def test_decoration_scalar(self):
        resolver = _resolver({"x": "mid"})
        assert resolver.resolve(None, "x", {"pre": "[", "post": "]"}) == "[mid]"

    def test_decoration_list(self):
        resolver = _resolver({"x": ["a", "b"]})
        assert resolver.resolve(None, "x", DecorationOptions(pre="[", post="]")) == ["[a]", "[b]"]

    def test_decoration_after_expansion(self):
        resolver = _resolver({"paths": {"root": "web/", "js": "${paths.root}js/"}})
        assert resolver.resolve("paths", "js", {"post": "app.js"}) == "web/js/app.js"

    def test_options_do_not_cross_contaminate(self):
        resolver = _resolver({"x": "mid"})

        square = resolver.resolve(None, "x", {"pre": "[", "post": "]"})
        round_ = resolver.resolve(None, "x", {"pre": "(", "post": ")"})
        plain = resolver.resolve(None, "x")

        assert (square, round_, plain) == ("[mid]", "(mid)", "mid")
        assert len(resolver.cache) == 3

    def test_missing_path_raises(self):
        resolver = _resolver({"paths": {"public": "web/"}})
        with pytest.raises(ResolutionError) as info:
            resolver.resolve("paths", "app.styles")
        assert info.value.path == "paths.app.styles"
        assert info.value.segment == "app"

    def test_raw_tree_untouched(self):
        resolver = _resolver({"a": "x", "t": {"b": "${a}"}})
        assert resolver.resolve(None, "t") == {"b": "x"}
        assert resolver.store.tree["t"] == {"b": "${a}"}


class TestConcat:
    def test_joins_from_empty_string(self):
        resolver = _resolver({"paths": {"root": "web/", "css": "css/"}})
        assert resolver.concat("paths", "root", "css") == "web/css/"

    def test_single_key(self):
        assert _resolver({"a": "x"}).concat(None, "a") == "x"

    def test_no_keys(self):
        assert _resolver({}).concat("paths") == ""

    def test_list_values_coerced(self):
        resolver = _resolver({"o": {"list": ["a", "b"], "tail": "!"}})
        assert resolver.concat("o", "list", "tail") == "a,b!"

    def test_missing_key_raises(self):
        with pytest.raises(ResolutionError):
            _resolver({"a": "x"}).concat(None, "a", "b")
