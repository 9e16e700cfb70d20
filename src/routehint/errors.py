"""Errors raised by the routehint host.

Two families:

- ``ConfigurationError``: a route template or ``format=`` that cannot be
  compiled. Raised while the app freezes, before any request is served.
- ``HTTPError`` and its subclasses: raised while serving and turned into
  a response by ``server.errors``. ``NotFound`` and ``MethodNotAllowed``
  come from the router; they are what the ``RouteHint`` middleware
  explains before letting them through unchanged.
"""

from dataclasses import dataclass


class RouteHintError(Exception):
    """Base class for every routehint error."""


class ConfigurationError(RouteHintError):
    """A route cannot be compiled.

    Examples: ``/users/<id>`` (Flask-style capture), ``/{rest...}/x``
    (multi capture not last), ``?{id:int}`` (converter in a query
    capture), or an unknown ``format=`` shorthand.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(RouteHintError):
    """A failure with an HTTP status.

    ``headers`` are copied onto whatever response ends up being sent,
    including the route hint page.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        return f"{self.status}: {self.detail}" if self.detail else str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route accepts the request's path, query, and format together."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: some route has this path, none has this method.

    ``allowed`` becomes the ``Allow`` header, sorted.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow = ", ".join(sorted(allowed))
        super().__init__(
            status=405,
            detail=detail or f"Method not allowed. Allowed methods: {allow}",
            headers=(("Allow", allow),),
        )


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413: ``Content-Length`` exceeds ``AppConfig.max_content_length``."""

    def __init__(self, limit: int) -> None:
        super().__init__(status=413, detail=f"Request body larger than {limit} bytes")
