"""Compiled router with trie-based path matching.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes. Path selection walks the trie;
method, static query items, and format then filter the routes stored
at the selected node.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from routehint.errors import ConfigurationError, MethodNotAllowed, NotFound
from routehint.http.media import PAYLOAD_METHODS, MediaType
from routehint.http.query import QueryItem
from routehint.http.request import split_path
from routehint.routing.route import Route, RouteMatch, Segment, SegmentKind

# Regex for each single-capture converter (``{id:int}``)
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
}

_MULTI_SUFFIX = "..."
_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _parse_capture(part: str, template: str) -> Segment:
    """Parse a ``{...}`` template part into a SINGLE or MULTI segment."""
    inner = part[1:-1].strip()
    if inner.endswith(_MULTI_SUFFIX):
        name, kind, param_type = inner[: -len(_MULTI_SUFFIX)], SegmentKind.MULTI, "path"
    elif ":" in inner:
        name, param_type = inner.split(":", 1)
        kind = SegmentKind.MULTI if param_type == "path" else SegmentKind.SINGLE
    else:
        name, kind, param_type = inner, SegmentKind.SINGLE, "str"

    if not _NAME_RE.match(name):
        msg = f"Invalid capture name {name!r} in route {template!r}."
        raise ConfigurationError(msg)
    if kind is SegmentKind.SINGLE and param_type not in CONVERTERS:
        known = ", ".join(sorted(CONVERTERS))
        msg = f"Unknown converter {param_type!r} in route {template!r}. Known: {known}, path."
        raise ConfigurationError(msg)
    return Segment(kind=kind, value=part, name=name, param_type=param_type)


def _check_multi_last(segments: list[Segment], template: str) -> None:
    for seg in segments[:-1]:
        if seg.kind is SegmentKind.MULTI:
            msg = f"Multi-segment capture {seg.value!r} must be last in route {template!r}."
            raise ConfigurationError(msg)


def parse_path(path: str) -> list[Segment]:
    """Parse a route path template into segments.

    Examples::

        "/users"             -> [Segment(STATIC, "users")]
        "/users/{id:int}"    -> [..., Segment(SINGLE, "{id:int}", "id", "int")]
        "/files/{rest...}"   -> [..., Segment(MULTI, "{rest...}", "rest", "path")]

    Raises:
        ConfigurationError: On Flask-style ``<param>`` captures, unknown
            converters, or a multi capture that is not the last segment.
    """
    segments: list[Segment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("<") and part.endswith(">"):
            msg = f"Route {path!r} uses <param> captures; routehint expects {{param}}."
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            segments.append(_parse_capture(part, path))
        else:
            segments.append(Segment(kind=SegmentKind.STATIC, value=part))
    _check_multi_last(segments, path)
    return segments


def parse_query(query: str) -> list[Segment]:
    """Parse a route query template (the part after ``?``) into segments.

    ``flag=23`` is a static literal keyed ``flag``; ``{when}`` captures
    the item whose key is ``when``; ``{rest...}`` collects every item not
    claimed by another segment.
    """
    segments: list[Segment] = []
    for part in query.split("&"):
        if not part:
            continue
        if part.startswith("{") and part.endswith("}"):
            seg = _parse_capture(part, query)
            if seg.kind is SegmentKind.SINGLE and seg.param_type != "str":
                msg = f"Query capture {part!r} cannot use a converter."
                raise ConfigurationError(msg)
            segments.append(seg)
        elif "{" in part or "}" in part:
            msg = f"Malformed query item {part!r} in route query {query!r}."
            raise ConfigurationError(msg)
        else:
            key, _, _ = part.partition("=")
            segments.append(Segment(kind=SegmentKind.STATIC, value=part, name=key))
    _check_multi_last(segments, query)
    return segments


def parse_route(
    template: str,
    handler: Callable[..., Any],
    method: str,
    *,
    name: str | None = None,
    format: str | MediaType | None = None,
) -> Route:
    """Build a frozen ``Route`` from a ``/path?query`` template."""
    path, sep, query = template.partition("?")
    if isinstance(format, str):
        try:
            media_type: MediaType | None = MediaType.from_format(format)
        except ValueError as exc:
            raise ConfigurationError(f"Route {template!r}: {exc}") from exc
    else:
        media_type = format
    return Route(
        path=template,
        handler=handler,
        method=method.upper(),
        path_segments=tuple(parse_path(path)),
        query_segments=tuple(parse_query(query)) or None,
        format=media_type,
        name=name,
    )


class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    __slots__ = ("catch_all", "children", "param_child", "routes")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one param pattern per level)
        self.param_child: _ParamEdge | None = None
        # Multi capture: consumes the rest of the path
        self.catch_all: _CatchAllEdge | None = None
        # Routes ending at this node, in registration order
        self.routes: list[Route] = []


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    regex: re.Pattern[str]
    node: _TrieNode


@dataclass(slots=True)
class _CatchAllEdge:
    """A catch-all edge — consumes remaining path."""

    param_name: str
    routes: list[Route]


def _query_matches(route: Route, items: tuple[QueryItem, ...] | None) -> bool:
    """Every static literal and single capture of the route must be present.

    Static literals match an item verbatim; a single capture needs an item
    with its key. Multi captures accept anything, including nothing.
    """
    if not route.query_segments:
        return True
    raw = {item.raw for item in items or ()}
    keys = {item.key for item in items or ()}
    for seg in route.query_segments:
        if seg.kind is SegmentKind.STATIC and seg.value not in raw:
            return False
        if seg.kind is SegmentKind.SINGLE and seg.name not in keys:
            return False
    return True


def _format_matches(route: Route, method: str, media_type: MediaType | None) -> bool:
    """Whether the route's declared format accepts the request's format.

    Payload methods must send a specific Content-Type that collides with
    the route's format. Other methods match when either side is silent.
    """
    if route.format is None:
        return True
    if method in PAYLOAD_METHODS:
        return media_type is not None and media_type.is_specific and route.format.collides_with(
            media_type
        )
    if media_type is None:
        return True
    return route.format.collides_with(media_type)


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router()
        router.add(parse_route("/users/{id:int}", handler, "GET"))
        router.compile()
        match = router.match("GET", "/users/42")
    """

    __slots__ = ("_compiled", "_root", "_routes")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._routes: list[Route] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        self._routes.append(route)
        node = self._root

        for seg in route.path_segments:
            if seg.kind is SegmentKind.MULTI:
                if node.catch_all is None:
                    node.catch_all = _CatchAllEdge(param_name=seg.name or "path", routes=[])
                node.catch_all.routes.append(route)
                return

            if seg.kind is SegmentKind.SINGLE:
                if node.param_child is None:
                    node.param_child = _ParamEdge(
                        param_name=seg.name or "",
                        regex=re.compile(f"^{CONVERTERS[seg.param_type]}$"),
                        node=_TrieNode(),
                    )
                node = node.param_child.node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        node.routes.append(route)

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in registration order."""
        return tuple(self._routes)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(
        self,
        method: str,
        path: str,
        *,
        query_items: tuple[QueryItem, ...] | None = None,
        media_type: MediaType | None = None,
    ) -> RouteMatch:
        """Match a request against compiled routes.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route accepts the path, query, and format.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        HEAD falls back to GET routes when no HEAD route is registered.
        """
        method = method.upper()
        result = self._match_node(self._root, split_path(path), 0, {})

        if result is None:
            raise NotFound(f"No route matches {method} {path!r}")

        routes, params = result
        same_method = [r for r in routes if r.method == method]
        if not same_method and method == "HEAD":
            same_method = [r for r in routes if r.method == "GET"]
        if not same_method:
            raise MethodNotAllowed(frozenset(r.method for r in routes))

        for route in same_method:
            if _query_matches(route, query_items) and _format_matches(route, method, media_type):
                return RouteMatch(route=route, path_params=params)

        raise NotFound(f"No route matches {method} {path!r}")

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> tuple[list[Route], dict[str, str]] | None:
        """Recursively match path parts against the trie."""
        # All parts consumed — routes here, or an empty catch-all
        if index == len(parts):
            if node.routes:
                return node.routes, params
            if node.catch_all is not None:
                return node.catch_all.routes, {**params, node.catch_all.param_name: ""}
            return None

        part = parts[index]

        # 1. Try static child first (exact match)
        if part in node.children:
            result = self._match_node(node.children[part], parts, index + 1, params)
            if result is not None:
                return result

        # 2. Try parameter child
        if node.param_child is not None:
            edge = node.param_child
            if edge.regex.match(part):
                new_params = {**params, edge.param_name: part}
                result = self._match_node(edge.node, parts, index + 1, new_params)
                if result is not None:
                    return result

        # 3. Try catch-all
        if node.catch_all is not None:
            remaining = "/".join(parts[index:])
            return node.catch_all.routes, {**params, node.catch_all.param_name: remaining}

        return None
