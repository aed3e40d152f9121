"""Waypoint — ordered URL routing with reverse routing.

Match request paths against placeholder templates and build URLs back
from route names.

Basic usage::

    from waypoint import Router

    router = Router()
    router.map("GET", "/user/[i:id]", "user.show", "user.show")

    match = router.match("/user/42", "GET")
    match.target   # "user.show"
    match.params   # {"id": "42"}

    router.generate("user.show", {"id": 42})  # "/user/42"

Template syntax::

    /posts/[i:page]?     optional typed placeholder
    /files/[:name].      default type, dots allowed
    @^/legacy/(?P<id>\\d+)  raw regular expression
    *                    any path
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "ContextVarSource",
    "DuplicateRoute",
    "EnvironSource",
    "InvalidInput",
    "InvalidMethod",
    "RequestInfo",
    "RequestSource",
    "Route",
    "RouteMatch",
    "RouteNotFound",
    "Router",
    "RouterConfig",
    "WaypointError",
    "request_var",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from waypoint.routing.router import Router

        return Router

    if name == "RouterConfig":
        from waypoint.config import RouterConfig

        return RouterConfig

    if name in ("Route", "RouteMatch"):
        from waypoint.routing import route as _route

        return getattr(_route, name)

    if name in ("ContextVarSource", "EnvironSource", "RequestInfo", "RequestSource", "request_var"):
        from waypoint import context as _ctx

        return getattr(_ctx, name)

    if name in (
        "ConfigurationError",
        "DuplicateRoute",
        "InvalidInput",
        "InvalidMethod",
        "RouteNotFound",
        "WaypointError",
    ):
        from waypoint import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
