"""Route, Placeholder and RouteMatch frozen dataclasses."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Placeholder:
    """A bracketed block found in a route template.

    Required:   ``/[i:id]``     (separator="/", type="i", name="id")
    Optional:   ``/[i:page]?``  (optional=True)
    Dotted:     ``/[:file].``   (allow_dots=True)
    Inline:     ``[\\d{4}:year]`` (type is used as a raw fragment)
    """

    block: str
    separator: str = ""
    type: str = ""
    name: str = ""
    optional: bool = False
    allow_dots: bool = False
    start: int = 0

    @property
    def body(self) -> str:
        """The block without its bound separator."""
        return self.block[len(self.separator) :]


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route.

    Created by ``Router.map``; never mutated afterwards.
    """

    methods: frozenset[str]
    template: str
    target: Any
    name: str | None = None
    on_root: bool = False


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    target: Any
    params: dict[str, str]
    route: str
    methods: frozenset[str]
    name: str | None = None
    record: Route | None = field(default=None, compare=False, repr=False)
