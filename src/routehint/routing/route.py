"""Route, Segment, and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from routehint.http.media import MediaType


class SegmentKind(Enum):
    """The three kinds of route template segment. The set is closed."""

    STATIC = "static"
    SINGLE = "single"
    MULTI = "multi"


@dataclass(frozen=True, slots=True)
class Segment:
    """A parsed segment of a route's path or query template.

    Path:
        ``/users``          STATIC, name=None
        ``/{id}``           SINGLE, name="id"
        ``/{id:int}``       SINGLE, name="id", param_type="int"
        ``/{rest...}``      MULTI,  name="rest" (must be last)

    Query:
        ``flag=23``         STATIC, name="flag" (value is the literal item)
        ``{when}``          SINGLE, name="when" (matched by key)
        ``{rest...}``       MULTI,  name="rest" (collects leftovers)
    """

    kind: SegmentKind
    value: str
    name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created by ``parse_route()`` at app freeze time. One route per method.
    ``query_segments`` is None when the template has no query items;
    ``format`` is None when the route accepts any media type.
    """

    path: str
    handler: Callable[..., Any]
    method: str
    path_segments: tuple[Segment, ...] = ()
    query_segments: tuple[Segment, ...] | None = None
    format: MediaType | None = None
    name: str | None = None

    def __str__(self) -> str:
        if self.format is not None:
            return f"{self.method} {self.path} [{self.format}]"
        return f"{self.method} {self.path}"


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
