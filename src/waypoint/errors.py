"""Waypoint exception hierarchy.

Shared across the route table, matcher, and generator so every module
raises and catches the same types.
"""


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(WaypointError):
    """Raised when the route table or its configuration is invalid.

    Registration-time errors derive from this, so a single ``except``
    around setup code catches every misconfiguration.
    """


class InvalidMethod(ConfigurationError):  # noqa: N818
    """A method specification names no recognized HTTP verb."""

    def __init__(self, spec: str) -> None:
        self.spec = spec
        super().__init__(f"Invalid method {spec!r}")


class DuplicateRoute(ConfigurationError):  # noqa: N818
    """A route name is already registered for one of the route's methods."""

    def __init__(self, name: str, method: str) -> None:
        self.name = name
        self.method = method
        super().__init__(f"Can not redeclare route {name!r} for method {method!r}")


class InvalidInput(ConfigurationError, TypeError):  # noqa: N818
    """Routes passed to ``add_routes`` are not an iterable of descriptors."""


class RouteNotFound(WaypointError, LookupError):  # noqa: N818
    """Reverse routing could not resolve a route name."""

    def __init__(self, name: str, method: str = "ANY") -> None:
        self.name = name
        self.method = method
        super().__init__(f"Route {name!r} does not exist.")
