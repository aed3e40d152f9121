"""HTTP method specifications.

Routes are registered with a pipe-separated spec like ``"GET|POST"``.
Specs that name every verb collapse to the ``ANY`` wildcard.
"""

from waypoint.errors import InvalidMethod

ANY = "ANY"

# Concrete verbs, in the order reverse routing probes them
VERBS: tuple[str, ...] = ("GET", "POST", "PATCH", "PUT", "DELETE")

_RECOGNIZED = frozenset((ANY, *VERBS))
_ANY_ONLY = frozenset((ANY,))


def parse_methods(spec: str) -> frozenset[str]:
    """Parse a method spec into the effective method set.

    Unknown tokens are ignored. Raises ``InvalidMethod`` when nothing
    recognizable is left.
    """
    tokens = {token.strip() for token in spec.upper().split("|")}
    methods = tokens & _RECOGNIZED
    if not methods:
        raise InvalidMethod(spec)
    if ANY in methods or len(methods) == len(VERBS):
        return _ANY_ONLY
    return frozenset(methods)


def ordered(methods: frozenset[str]) -> list[str]:
    """Return *methods* in canonical order (ANY first, then VERBS)."""
    return [m for m in (ANY, *VERBS) if m in methods]


def allows(methods: frozenset[str], request_method: str) -> bool:
    """Whether a route with *methods* accepts *request_method*."""
    return ANY in methods or request_method.upper() in methods
