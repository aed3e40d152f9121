"""Tests for waypoint.routing.compiler — scanning and pattern synthesis."""

import pytest

from waypoint.errors import ConfigurationError
from waypoint.routing.compiler import (
    PatternCache,
    compile_raw,
    compile_template,
    scan,
    template_regex,
)
from waypoint.routing.match_types import MatchTypeRegistry
from waypoint.routing.route import Placeholder


@pytest.fixture
def registry() -> MatchTypeRegistry:
    return MatchTypeRegistry()


class TestScan:
    def test_no_placeholders(self) -> None:
        assert scan("/about") == []

    def test_typed_named(self) -> None:
        assert scan("/users/[i:id]") == [
            Placeholder(block="/[i:id]", separator="/", type="i", name="id", start=6)
        ]

    def test_default_type(self) -> None:
        (placeholder,) = scan("/[:slug]")
        assert placeholder.type == ""
        assert placeholder.name == "slug"

    def test_optional(self) -> None:
        (placeholder,) = scan("/[:slug]?")
        assert placeholder.optional is True
        assert placeholder.allow_dots is False
        assert placeholder.block == "/[:slug]?"

    def test_allow_dots(self) -> None:
        (placeholder,) = scan("/files/[:name].")
        assert placeholder.allow_dots is True
        assert placeholder.optional is False

    def test_no_colon_is_unnamed(self) -> None:
        (placeholder,) = scan("/feed[i]")
        assert placeholder.type == "i"
        assert placeholder.name == ""
        assert placeholder.separator == ""
        assert placeholder.start == 5

    def test_dot_separator(self) -> None:
        (placeholder,) = scan("/feed.[a:format]")
        assert placeholder.separator == "."
        assert placeholder.body == "[a:format]"

    def test_order_preserved(self) -> None:
        names = [p.name for p in scan("/[i:year]/[i:month]/[:slug]?")]
        assert names == ["year", "month", "slug"]


class TestTemplateRegex:
    def test_required(self, registry: MatchTypeRegistry) -> None:
        assert template_regex("/user/[i:id]", registry) == r"^/user(?:/(?P<id>[0-9]++))$"

    def test_optional_marker_doubled(self, registry: MatchTypeRegistry) -> None:
        assert template_regex("/posts/[i:page]?", registry) == r"^/posts(?:/(?P<page>[0-9]++)?)?$"

    def test_dot_separator_escaped(self, registry: MatchTypeRegistry) -> None:
        expected = r"^/feed(?:\.(?P<format>[0-9A-Za-z]++))$"
        assert template_regex("/feed.[a:format]", registry) == expected

    def test_allow_dots_fragment(self, registry: MatchTypeRegistry) -> None:
        assert template_regex("/files/[:name].", registry) == r"^/files(?:/(?P<name>[^/]++))$"

    def test_unnamed_group(self, registry: MatchTypeRegistry) -> None:
        assert template_regex("/feed[i]", registry) == r"^/feed(?:([0-9]++))$"


class TestCompileTemplate:
    def test_captures(self, registry: MatchTypeRegistry) -> None:
        pattern = compile_template("/users/[i:user]/posts/[i:post]", registry)
        found = pattern.fullmatch("/users/1/posts/42")
        assert found is not None
        assert found.groupdict() == {"user": "1", "post": "42"}

    def test_type_constrains(self, registry: MatchTypeRegistry) -> None:
        pattern = compile_template("/user/[i:id]", registry)
        assert pattern.fullmatch("/user/abc") is None

    def test_literal_text_verbatim(self, registry: MatchTypeRegistry) -> None:
        pattern = compile_template("/v1.0/[i:id]", registry)
        assert pattern.fullmatch("/v1.0/5") is not None
        assert pattern.fullmatch("/v1x0/5") is None

    def test_inline_fragment(self, registry: MatchTypeRegistry) -> None:
        pattern = compile_template(r"/year/[\d{4}:year]", registry)
        assert pattern.fullmatch("/year/2024") is not None
        assert pattern.fullmatch("/year/24") is None

    def test_anchored(self, registry: MatchTypeRegistry) -> None:
        pattern = compile_template("/user/[i:id]", registry)
        assert pattern.fullmatch("/user/5/extra") is None
        assert pattern.fullmatch("/prefix/user/5") is None

    def test_invalid_group_name(self, registry: MatchTypeRegistry) -> None:
        with pytest.raises(ConfigurationError, match="/\\[i:bad-name\\]"):
            compile_template("/[i:bad-name]", registry)

    def test_custom_type(self) -> None:
        registry = MatchTypeRegistry({"slug": r"[a-z0-9-]++"})
        pattern = compile_template("/blog/[slug:slug]", registry)
        assert pattern.fullmatch("/blog/hello-world") is not None
        assert pattern.fullmatch("/blog/Hello") is None


class TestCompileRaw:
    def test_searches(self) -> None:
        pattern = compile_raw(r"/legacy/(?P<id>\d+)")
        found = pattern.search("/old/legacy/7")
        assert found is not None
        assert found.group("id") == "7"

    def test_invalid(self) -> None:
        with pytest.raises(ConfigurationError):
            compile_raw("(unclosed")


class TestPatternCache:
    def test_compiles_once(self, registry: MatchTypeRegistry) -> None:
        cache = PatternCache()
        calls: list[int] = []

        def factory():
            calls.append(1)
            return compile_template("/user/[i:id]", registry)

        key = ("template", "/user/[i:id]", 0)
        first = cache.get(key, factory)
        second = cache.get(key, factory)
        assert first is second
        assert len(calls) == 1
        assert len(cache) == 1

    def test_clear(self, registry: MatchTypeRegistry) -> None:
        cache = PatternCache()
        cache.get(("template", "/[:x]", 0), lambda: compile_template("/[:x]", registry))
        assert len(cache) == 1
        cache.clear()
        assert len(cache) == 0

    def test_disabled_does_not_store(self, registry: MatchTypeRegistry) -> None:
        cache = PatternCache(enabled=False)
        cache.get(("template", "/[:x]", 0), lambda: compile_template("/[:x]", registry))
        assert len(cache) == 0
