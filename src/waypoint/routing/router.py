"""Ordered route table with reverse routing.

Routes are registered during setup and matched in registration order:
the first route whose methods and template accept a request wins.
Named routes can be turned back into URLs with ``generate``.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, TypeAlias

from waypoint._internal.types import Params, Target
from waypoint.config import RouterConfig
from waypoint.context import RequestInfo, RequestSource
from waypoint.errors import ConfigurationError, DuplicateRoute, InvalidInput, RouteNotFound
from waypoint.routing.compiler import PatternCache
from waypoint.routing.generator import build_url
from waypoint.routing.match_types import MatchTypeRegistry
from waypoint.routing.matcher import match_route, route_pattern, strip_query, validate_route
from waypoint.routing.methods import ANY, VERBS, allows, ordered, parse_methods
from waypoint.routing.route import Route, RouteMatch

logger = logging.getLogger("waypoint.routing")

# (method, template, target[, name]) or a mapping with those keys
RouteSpec: TypeAlias = Sequence[Any] | Mapping[str, Any]


class Router:
    """Ordered route table.

    Usage::

        router = Router(base_path="/app/")
        router.map("GET", "/users/[i:id]", show_user, "user.show")
        router.map("GET|POST", "/users", user_list, "users")

        match = router.match("/users/42", "GET")
        # match.target is show_user, match.params == {"id": "42"}

        router.generate("user.show", {"id": 42})  # "/users/42"

    The table is not locked. Build it before serving, or swap in a new
    router instead of mutating a live one.
    """

    __slots__ = (
        "_base_path",
        "_cache",
        "_config",
        "_match_types",
        "_named",
        "_request_source",
        "_routes",
    )

    def __init__(
        self,
        routes: Iterable[RouteSpec] = (),
        config: RouterConfig | None = None,
        *,
        base_path: str | None = None,
        match_types: Mapping[str, str] | None = None,
        request_source: RequestSource | None = None,
    ) -> None:
        self._config = config or RouterConfig()
        self._routes: list[Route] = []
        # (verb or ANY, name) -> template
        self._named: dict[tuple[str, str], str] = {}
        self._base_path = self._config.base_path
        self._match_types = MatchTypeRegistry(self._config.match_types)
        self._cache = PatternCache(enabled=self._config.cache_patterns)
        self._request_source = request_source

        if base_path is not None:
            self.set_base_path(base_path)
        if match_types:
            self.add_match_types(match_types)
        self.add_routes(routes)

    # -- Configuration --

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def match_types(self) -> Mapping[str, str]:
        """Current token → fragment table (read-only view)."""
        return self._match_types

    def set_base_path(self, base_path: str) -> None:
        """Set the prefix for templates that do not start with ``/``.

        Useful when the application is served from a subdirectory.
        """
        self._base_path = base_path
        self._cache.clear()
        logger.debug("Base path set to %r", base_path)

    def add_match_types(self, match_types: Mapping[str, str]) -> None:
        """Merge placeholder types; existing tokens are overwritten.

        Every registered route is recompiled against the merged types
        first. Raises ``ConfigurationError`` and keeps the old types if
        any of them no longer compiles.
        """
        candidate = MatchTypeRegistry(self._match_types)
        candidate.update(match_types)
        for route in self._routes:
            validate_route(route, candidate)
        self._match_types.update(match_types)
        self._cache.clear()
        logger.debug("Match types updated: %s", ", ".join(map(repr, match_types)))

    # -- Registration --

    def map(self, method: str, template: str, target: Target, name: str | None = None) -> Route:
        """Register a route.

        *method* is one verb or a pipe-separated list (``"GET|POST"``);
        ``"ANY"`` accepts every method. *name* makes the route available
        to ``generate``.

        Raises ``InvalidMethod`` if *method* names no known verb,
        ``DuplicateRoute`` if *name* is already taken for one of the
        route's methods, and ``ConfigurationError`` if *template* does not
        compile. Nothing is registered when any of them is raised.
        """
        methods = parse_methods(method)
        route = Route(
            methods=methods,
            template=template,
            target=target,
            name=name or None,
            on_root=template.startswith("/"),
        )
        validate_route(route, self._match_types)

        if name:
            keys = [(verb, name) for verb in ordered(methods)]
            for key in keys:
                if key in self._named:
                    raise DuplicateRoute(name, key[0])
            for key in keys:
                self._named[key] = template

        self._routes.append(route)
        logger.debug("Mapped %s %r (name=%r)", "|".join(ordered(methods)), template, name)
        return route

    def add_routes(self, routes: Iterable[RouteSpec]) -> None:
        """Register several routes at once.

        Each entry is ``(method, template, target)``,
        ``(method, template, target, name)``, or a mapping with those
        keys. Stops at the first invalid entry, propagating its error;
        earlier entries stay registered.
        """
        if isinstance(routes, (str, bytes)) or not isinstance(routes, Iterable):
            msg = f"Routes should be an iterable of route descriptors, got {type(routes).__name__}"
            raise InvalidInput(msg)
        for spec in routes:
            if isinstance(spec, Mapping):
                self.map(**spec)
            elif isinstance(spec, Sequence) and not isinstance(spec, (str, bytes)):
                self.map(*spec)
            else:
                msg = f"Invalid route descriptor {spec!r}"
                raise InvalidInput(msg)

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes, in matching order."""
        return list(self._routes)

    def get_routes(self) -> list[Route]:
        """Alias of ``routes`` for callers that prefer a method."""
        return self.routes

    def compile(self) -> int:
        """Compile every pattern ahead of serving.

        Optional: patterns are otherwise compiled on first use. Returns
        the number of routes that needed a pattern.
        """
        count = 0
        for route in self._routes:
            if route_pattern(route, self._base_path, self._cache, self._match_types) is not None:
                count += 1
        logger.debug("Compiled %d of %d route patterns", count, len(self._routes))
        return count

    # -- Matching --

    def match(self, path: str | None = None, method: str | None = None) -> RouteMatch | None:
        """Match a request against the table.

        Returns a ``RouteMatch`` for the first accepting route, or
        ``None``. A missing *path* or *method* is read from the
        router's request source.
        """
        if path is None or method is None:
            current = self._current_request()
            path = current.path if path is None else path
            method = current.method if method is None else method

        path = strip_query(path)
        method = method.upper()

        for route in self._routes:
            if not allows(route.methods, method):
                continue
            params = match_route(route, path, self._base_path, self._cache, self._match_types)
            if params is not None:
                logger.debug("%s %s -> %r", method, path, route.template)
                return RouteMatch(
                    target=route.target,
                    params=params,
                    route=route.template,
                    methods=route.methods,
                    name=route.name,
                    record=route,
                )

        logger.debug("No route matches %s %r", method, path)
        return None

    def _current_request(self) -> RequestInfo:
        if self._request_source is None:
            msg = "match() needs a path and method, or a request_source to read them from."
            raise ConfigurationError(msg)
        return self._request_source.current()

    # -- Reverse routing --

    def generate(self, name: str, params: Params | None = None, method: str | None = None) -> str:
        """Build the URL of a named route.

        Placeholders are filled from *params*; missing optional ones are
        dropped. A missing required placeholder is dropped too rather
        than raising, so check your params if a URL looks short.

        Raises ``RouteNotFound`` if *name* resolves to no route.
        """
        method = method.upper() if method else ANY
        template = self._resolve(name, method)
        return build_url(template, params or {}, self._base_path)

    def url_for(self, name: str, /, method: str | None = None, **params: Any) -> str:
        """Keyword-argument form of ``generate``."""
        return self.generate(name, params, method)

    def _resolve(self, name: str, method: str) -> str:
        for key in ((method, name), (ANY, name), *((verb, name) for verb in VERBS)):
            template = self._named.get(key)
            if template is not None:
                return template

        if self._config.allow_generate_anonymous:
            for route in self._routes:
                if route.template == name and (method == ANY or allows(route.methods, method)):
                    return route.template

        raise RouteNotFound(name, method)
