"""Tests for waypoint.config — RouterConfig frozen dataclass."""

import pytest

from waypoint.config import RouterConfig
from waypoint.routing.router import Router


class TestRouterConfig:
    def test_defaults(self) -> None:
        cfg = RouterConfig()

        assert cfg.base_path == ""
        assert dict(cfg.match_types) == {}
        assert cfg.allow_generate_anonymous is False
        assert cfg.cache_patterns is True

    def test_override(self) -> None:
        cfg = RouterConfig(base_path="/app/", allow_generate_anonymous=True)

        assert cfg.base_path == "/app/"
        assert cfg.allow_generate_anonymous is True

    def test_frozen(self) -> None:
        cfg = RouterConfig()

        with pytest.raises(AttributeError):
            cfg.base_path = "/x/"  # type: ignore[misc]


class TestRouterUsesConfig:
    def test_base_path(self) -> None:
        r = Router(config=RouterConfig(base_path="/app/"))
        assert r.base_path == "/app/"

    def test_match_types(self) -> None:
        r = Router(config=RouterConfig(match_types={"slug": r"[a-z-]++"}))
        assert r.match_types["slug"] == r"[a-z-]++"

    def test_keyword_base_path_overrides_config(self) -> None:
        r = Router(config=RouterConfig(base_path="/app/"), base_path="/v2/")
        assert r.base_path == "/v2/"

    def test_setter_leaves_config_untouched(self) -> None:
        cfg = RouterConfig(base_path="/app/")
        r = Router(config=cfg)
        r.set_base_path("/other/")
        assert r.base_path == "/other/"
        assert cfg.base_path == "/app/"
        assert r.config is cfg
