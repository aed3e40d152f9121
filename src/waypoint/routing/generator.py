"""Reverse routing — turn a template and parameter values into a URL."""

import re
from collections.abc import Mapping
from typing import Any

from waypoint.routing.compiler import scan
from waypoint.routing.route import Placeholder

_TRAILING_SLASHES = re.compile(r"/+$")


def build_url(template: str, params: Mapping[str, Any], base_path: str = "") -> str:
    """Substitute *params* into the placeholders of *template*.

    - Supplied blocks are replaced by ``str(value)``; the separator stays.
    - Missing optional blocks are removed with their separator, except a
      separator that is the template's leading ``/``.
    - Missing required blocks are removed but keep their separator. No
      error is raised for them.

    Trailing slashes are collapsed to one. Slashes elsewhere are left
    alone, since a missing optional block mid-template may leave ``//``
    that the route still expects.
    """
    url = template if template.startswith("/") else base_path + template

    for placeholder in scan(template):
        body = placeholder.body
        value = params.get(placeholder.name) if placeholder.name else None
        if value is not None:
            url = url.replace(body, str(value))
        elif placeholder.optional and not _at_root(placeholder):
            url = url.replace(placeholder.block, "")
        else:
            url = url.replace(body, "")

    return _TRAILING_SLASHES.sub("/", url)


def _at_root(placeholder: Placeholder) -> bool:
    return placeholder.separator == "/" and placeholder.start == 0
