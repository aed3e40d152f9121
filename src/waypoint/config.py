"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


def _empty_match_types() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(base_path="/app/", match_types={"slug": r"[a-z0-9-]++"})
    """

    # Prepended to templates that do not start with "/"
    base_path: str = ""

    # Extra placeholder types, merged over the built-ins (last write wins)
    match_types: Mapping[str, str] = field(default_factory=_empty_match_types)

    # Reverse routing: fall back to unnamed routes whose template equals the name
    allow_generate_anonymous: bool = False

    # Memoize compiled patterns per effective template
    cache_patterns: bool = True
