"""Routing diff builder — one ``DiffRecord`` per (route, request) pair.

``build`` is a pure function of its two inputs: the same route and the
same request always produce equal records.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from routehint.hint.media import MediaTypeDiff, compare
from routehint.hint.segments import SegmentDiff, diff_path, diff_query
from routehint.http.headers import Headers
from routehint.http.media import MediaType, negotiated_media_type
from routehint.http.query import QueryItem, split_query
from routehint.http.request import split_path

if TYPE_CHECKING:
    from routehint.http.request import Request
    from routehint.routing.route import Route


@dataclass(frozen=True, slots=True)
class SameMethod:
    method: str


@dataclass(frozen=True, slots=True)
class ChangedMethod:
    route_method: str
    request_method: str


type MethodDiff = SameMethod | ChangedMethod


@dataclass(frozen=True, slots=True)
class RequestShape:
    """The parts of a request the explainer looks at.

    ``query_items`` is None when the request has no query string.
    ``target`` is the path-plus-query used in report headers.
    """

    method: str
    segments: tuple[str, ...]
    query_items: tuple[QueryItem, ...] | None = None
    media_type: MediaType | None = None
    target: str = "/"

    @classmethod
    def from_request(cls, request: Request) -> RequestShape:
        """Snapshot a host request."""
        return cls(
            method=request.method.upper(),
            segments=tuple(request.segments),
            query_items=request.query.raw_items(),
            media_type=request.format,
            target=request.url,
        )

    @classmethod
    def from_url(
        cls,
        method: str,
        url: str,
        *,
        accept: str | None = None,
        content_type: str | None = None,
    ) -> RequestShape:
        """Describe a hypothetical request (``routehint explain``, tests)."""
        path, sep, query = url.partition("?")
        raw_headers: list[tuple[bytes, bytes]] = []
        if accept is not None:
            raw_headers.append((b"accept", accept.encode("latin-1")))
        if content_type is not None:
            raw_headers.append((b"content-type", content_type.encode("latin-1")))
        return cls(
            method=method.upper(),
            segments=tuple(split_path(path)),
            query_items=split_query(query) if sep and query else None,
            media_type=negotiated_media_type(method, Headers(tuple(raw_headers))),
            target=url or "/",
        )


@dataclass(frozen=True, slots=True)
class DiffRecord:
    """How one route compares with one request. Built, rendered, discarded."""

    method_diff: MethodDiff
    path_diff: tuple[SegmentDiff, ...]
    query_diff: tuple[SegmentDiff, ...]
    media_diff: MediaTypeDiff


def build(route: Route, request: RequestShape) -> DiffRecord:
    """Diff *route* against *request* across method, path, query, and format."""
    if route.method == request.method:
        method_diff: MethodDiff = SameMethod(route.method)
    else:
        method_diff = ChangedMethod(route.method, request.method)
    return DiffRecord(
        method_diff=method_diff,
        path_diff=diff_path(route.path_segments, request.segments),
        query_diff=diff_query(route.query_segments, request.query_items),
        media_diff=compare(route.format, request.media_type),
    )
