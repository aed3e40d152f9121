"""Per-route matching.

``match_route`` decides whether one registered route accepts a request
path, dispatching on the template's shape from cheapest to most
expensive check::

    "*"              -> always
    "@^/feed/(\\d+)"  -> raw pattern, searched against the path
    "/about"         -> string equality
    "/users/[i:id]"  -> prefix rejection, then compiled pattern
"""

import re

from waypoint.errors import ConfigurationError
from waypoint.routing.compiler import (
    PLACEHOLDER_RE,
    PatternCache,
    compile_raw,
    compile_template,
    scan,
)
from waypoint.routing.match_types import MatchTypeRegistry
from waypoint.routing.route import Route


def strip_query(path: str) -> str:
    """Drop everything from the first ``?`` on."""
    return path.partition("?")[0]


def effective_template(route: Route, base_path: str) -> str:
    """The template a request path is compared against.

    Root-anchored templates ignore the base path; the rest are appended
    to it.
    """
    if route.on_root:
        return route.template
    return base_path + route.template.lstrip("/")


def route_pattern(
    route: Route,
    base_path: str,
    cache: PatternCache,
    registry: MatchTypeRegistry,
) -> re.Pattern[str] | None:
    """Compiled (cached) pattern for *route*, or ``None`` for routes that
    match by plain comparison.
    """
    template = route.template
    if template == "*":
        return None
    if template.startswith("@"):
        body = template[1:]
        return cache.get(("raw", body, 0), lambda: compile_raw(body))
    verify = effective_template(route, base_path)
    if PLACEHOLDER_RE.search(verify) is None:
        return None
    return cache.get(
        ("template", verify, registry.version),
        lambda: compile_template(verify, registry),
    )


def _prefix_rejects(path: str, template: str, position: int) -> bool:
    """Cheap test that *path* cannot match the placeholder *template*.

    *position* is where the first placeholder starts, bound separator
    included. Everything before it is literal text the path must repeat,
    so an optional block can still give up its ``/`` or ``.``.
    """
    return path[:position] != template[:position]


def match_route(
    route: Route,
    path: str,
    base_path: str,
    cache: PatternCache,
    registry: MatchTypeRegistry,
) -> dict[str, str] | None:
    """Return the captured params if *route* matches *path*, else ``None``.

    Only named captures are kept; optional groups that did not take part
    in the match are left out.
    """
    template = route.template

    if template == "*":
        return {}

    if template.startswith("@"):
        pattern = route_pattern(route, base_path, cache, registry)
        found = pattern.search(path) if pattern else None
        return _named(found.groupdict()) if found else None

    verify = effective_template(route, base_path)
    first = PLACEHOLDER_RE.search(verify)
    if first is None:
        return {} if path == verify else None

    if _prefix_rejects(path, verify, first.start()):
        return None

    pattern = route_pattern(route, base_path, cache, registry)
    found = pattern.fullmatch(path) if pattern else None
    return _named(found.groupdict()) if found else None


def validate_route(route: Route, registry: MatchTypeRegistry) -> None:
    """Compile *route* once so a bad template fails at registration.

    Raises ``ConfigurationError`` for invalid raw bodies, placeholder
    names that are not identifiers, and fragments that do not compile.
    """
    template = route.template
    if template.startswith("@"):
        compile_raw(template[1:])
        return
    for placeholder in scan(template):
        if placeholder.name and not placeholder.name.isidentifier():
            msg = f"Placeholder name {placeholder.name!r} in {template!r} is not an identifier"
            raise ConfigurationError(msg)
    if PLACEHOLDER_RE.search(template):
        compile_template(template, registry)


def _named(groups: dict[str, str | None]) -> dict[str, str]:
    return {key: value for key, value in groups.items() if value is not None}
