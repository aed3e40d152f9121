"""Request-context providers.

``Router.match()`` called without a path or method asks an injected
``RequestSource`` for the current request. Two sources ship:

- ``ContextVarSource``: reads ``request_var``, set by whatever serves
  the request (ASGI handler, test harness, ...).
- ``EnvironSource``: reads a WSGI/CGI-style environ mapping.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading. No locks needed.
"""

from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class RequestInfo:
    """The two request facts the router needs."""

    path: str = "/"
    method: str = "GET"


@runtime_checkable
class RequestSource(Protocol):
    """Supplies the request being served."""

    def current(self) -> RequestInfo: ...


# -- ContextVar-backed source --

request_var: ContextVar[RequestInfo] = ContextVar("waypoint_request")
"""The current request. Set by the serving layer before matching."""


class ContextVarSource:
    """Read the current request from ``request_var``.

    Raises ``LookupError`` if called outside a request context.
    """

    __slots__ = ("_var",)

    def __init__(self, var: ContextVar[RequestInfo] = request_var) -> None:
        self._var = var

    def current(self) -> RequestInfo:
        return self._var.get()


# -- Environ-backed source --


class EnvironSource:
    """Read the request from a WSGI/CGI environ.

    Path comes from ``REQUEST_URI`` when the server provides it, else
    ``PATH_INFO`` plus ``QUERY_STRING``, else ``/``. Method defaults to
    ``GET``.
    """

    __slots__ = ("_environ",)

    def __init__(self, environ: Mapping[str, str]) -> None:
        self._environ = environ

    def current(self) -> RequestInfo:
        env = self._environ
        path = env.get("REQUEST_URI")
        if path is None:
            path = env.get("PATH_INFO") or "/"
            if query := env.get("QUERY_STRING"):
                path = f"{path}?{query}"
        return RequestInfo(path=path, method=env.get("REQUEST_METHOD") or "GET")
