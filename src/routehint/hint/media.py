"""Media type comparator — route ``format`` versus the request's format.

The top and sub parts are compared independently:

- equal (case-insensitive)     -> ``TrueStatic``
- either side is ``*``         -> ``TrueDynamic`` (a loose match)
- otherwise                    -> ``PartMismatch`` with the edit script
"""

from __future__ import annotations

from dataclasses import dataclass

from routehint.hint.textdiff import EditScript, diff
from routehint.http.media import WILDCARD, MediaType


@dataclass(frozen=True, slots=True)
class TrueStatic:
    text: str


@dataclass(frozen=True, slots=True)
class TrueDynamic:
    route_part: str
    request_part: str


@dataclass(frozen=True, slots=True)
class PartMismatch:
    script: EditScript


type PartMatch = TrueStatic | TrueDynamic | PartMismatch


@dataclass(frozen=True, slots=True)
class BothMatch:
    """Both sides declare a media type; each part carries its own result.

    The name is historical: either part may still be a ``PartMismatch``.
    """

    top: PartMatch
    sub: PartMatch


@dataclass(frozen=True, slots=True)
class RouteExpectsButRequestLacks:
    expected: str


@dataclass(frozen=True, slots=True)
class RequestHasButRouteDoesNotExpect:
    actual: str


@dataclass(frozen=True, slots=True)
class NeitherExpects:
    pass


type MediaTypeDiff = (
    BothMatch | RouteExpectsButRequestLacks | RequestHasButRouteDoesNotExpect | NeitherExpects
)


def compare_part(route_part: str, request_part: str) -> PartMatch:
    """Compare one part (top or sub) of two media types."""
    if route_part.lower() == request_part.lower():
        return TrueStatic(route_part)
    if WILDCARD in (route_part, request_part):
        return TrueDynamic(route_part, request_part)
    return PartMismatch(diff(request_part, route_part))


def compare(route_media: MediaType | None, request_media: MediaType | None) -> MediaTypeDiff:
    """Compare a route's declared format with the request's negotiated one."""
    if route_media is None:
        if request_media is None:
            return NeitherExpects()
        return RequestHasButRouteDoesNotExpect(str(request_media))
    if request_media is None:
        return RouteExpectsButRequestLacks(str(route_media))
    return BothMatch(
        top=compare_part(route_media.top, request_media.top),
        sub=compare_part(route_media.sub, request_media.sub),
    )
