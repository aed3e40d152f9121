"""Template scanning and regular-expression synthesis.

A template such as ``/users/[i:id]/[:action]?`` is scanned into
placeholders and compiled into an anchored pattern with one named group
per named placeholder::

    ^/users(?:/(?P<id>[0-9]++))(?:/(?P<action>[^/\\.]++)?)?$

Compilation is the expensive step of matching, so patterns are memoized
in a ``PatternCache`` keyed by effective template.
"""

import logging
import re
import threading
from collections.abc import Callable

from waypoint.errors import ConfigurationError
from waypoint.routing.match_types import MatchTypeRegistry
from waypoint.routing.route import Placeholder

logger = logging.getLogger("waypoint.routing")

# separator, type, name, trailer ("?" optional, "." allow dots)
PLACEHOLDER_RE = re.compile(r"(/|\.|)\[([^:\]]*+)(?::([^:\]]*+))?\]([?.]*)")


def scan(template: str) -> list[Placeholder]:
    """Find every placeholder block in *template*, left to right.

    Examples::

        "/users/[i:id]"   -> [Placeholder("/[i:id]", "/", "i", "id")]
        "/[:slug]?"       -> [Placeholder("/[:slug]?", "/", "", "slug", optional=True)]
        "/feed[i]"        -> [Placeholder("[i]", "", "i", "")]
    """
    return [
        Placeholder(
            block=m.group(0),
            separator=m.group(1),
            type=m.group(2),
            name=m.group(3) or "",
            optional="?" in m.group(4),
            allow_dots="." in m.group(4),
            start=m.start(),
        )
        for m in PLACEHOLDER_RE.finditer(template)
    ]


def block_pattern(placeholder: Placeholder, registry: MatchTypeRegistry) -> str:
    """Sub-pattern for one placeholder, separator included.

    The optional marker is applied twice so an absent block also drops
    its separator: ``(?:/(?P<page>[0-9]++)?)?``.
    """
    fragment = registry.resolve(placeholder.type, allow_dots=placeholder.allow_dots)
    if placeholder.name:
        group = f"(?P<{placeholder.name}>{fragment})"
    else:
        group = f"({fragment})"
    opt = "?" if placeholder.optional else ""
    return f"(?:{re.escape(placeholder.separator)}{group}{opt}){opt}"


def template_regex(template: str, registry: MatchTypeRegistry) -> str:
    """Build the anchored pattern source for *template*.

    Literal text between placeholders is escaped and matched verbatim.
    """
    parts = ["^"]
    pos = 0
    for placeholder in scan(template):
        parts.append(re.escape(template[pos : placeholder.start]))
        parts.append(block_pattern(placeholder, registry))
        pos = placeholder.start + len(placeholder.block)
    parts.append(re.escape(template[pos:]))
    parts.append("$")
    return "".join(parts)


def compile_template(template: str, registry: MatchTypeRegistry) -> re.Pattern[str]:
    """Compile *template* into an anchored pattern.

    Raises ``ConfigurationError`` if a match type or placeholder name
    produces an invalid expression.
    """
    source = template_regex(template, registry)
    try:
        return re.compile(source)
    except re.error as exc:
        msg = f"Route template {template!r} compiles to an invalid pattern: {exc}"
        raise ConfigurationError(msg) from exc


def compile_raw(body: str) -> re.Pattern[str]:
    """Compile the body of an ``@`` route. Searched, not anchored."""
    try:
        return re.compile(body)
    except re.error as exc:
        msg = f"Raw route pattern {body!r} is not a valid expression: {exc}"
        raise ConfigurationError(msg) from exc


class PatternCache:
    """Memo of compiled patterns.

    Keys carry the registry version, so a pattern compiled before
    ``add_match_types`` is never served afterwards. Concurrent first use
    may compile twice; the first insert wins.
    """

    __slots__ = ("_enabled", "_lock", "_patterns")

    def __init__(self, *, enabled: bool = True) -> None:
        self._enabled = enabled
        self._lock = threading.Lock()
        self._patterns: dict[tuple[str, str, int], re.Pattern[str]] = {}

    def __len__(self) -> int:
        return len(self._patterns)

    def get(
        self,
        key: tuple[str, str, int],
        factory: Callable[[], re.Pattern[str]],
    ) -> re.Pattern[str]:
        pattern = self._patterns.get(key)
        if pattern is not None:
            return pattern
        pattern = factory()
        if not self._enabled:
            return pattern
        with self._lock:
            return self._patterns.setdefault(key, pattern)

    def clear(self) -> None:
        with self._lock:
            if self._patterns:
                logger.debug("Dropping %d compiled route patterns", len(self._patterns))
            self._patterns = {}
