"""Shared type aliases used across waypoint modules."""

from collections.abc import Mapping
from typing import Any, TypeAlias

# Route target — never interpreted by the router
Target: TypeAlias = Any

# Parameter values supplied to reverse routing
Params: TypeAlias = Mapping[str, Any]
