"""Segment classifier — per-segment diffs for path and query templates.

Each route segment is classified against the request into exactly one
``SegmentDiff``:

==================  ====================================================
``StaticMatch``     a static literal found verbatim
``SingleMatch``     a single capture and the value it would take
``MultiMatch``      a multi capture and every value it would absorb
``TextMismatch``    a static literal that differs; carries the edit script
``Missing``         the route expects something the request lacks
``Unexpected``      the request has something the route doesn't expect
==================  ====================================================

Path segments are positional. Query items are unordered, so query
literals are found by searching, not by position.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from routehint.hint.textdiff import EditScript, diff, distance
from routehint.http.query import QueryItem
from routehint.routing.route import Segment, SegmentKind


@dataclass(frozen=True, slots=True)
class StaticMatch:
    text: str


@dataclass(frozen=True, slots=True)
class SingleMatch:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class MultiMatch:
    name: str
    values: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class TextMismatch:
    script: EditScript


@dataclass(frozen=True, slots=True)
class Missing:
    expected: str


@dataclass(frozen=True, slots=True)
class Unexpected:
    actual: str


type SegmentDiff = StaticMatch | SingleMatch | MultiMatch | TextMismatch | Missing | Unexpected


# ---------------------------------------------------------------------------
# Path
# ---------------------------------------------------------------------------


def classify_path(segment: Segment, remaining: Sequence[str]) -> SegmentDiff:
    """Classify one route path segment against the request segments left.

    ``remaining[0]`` is the request segment at this position; a MULTI
    segment absorbs all of *remaining*.
    """
    if not remaining:
        return Missing(segment.value)

    actual = remaining[0]
    match segment.kind:
        case SegmentKind.STATIC:
            if actual == segment.value:
                return StaticMatch(actual)
            return TextMismatch(diff(actual, segment.value))
        case SegmentKind.SINGLE:
            return SingleMatch(segment.name or "", actual)
        case SegmentKind.MULTI:
            return MultiMatch(segment.name or "", tuple(remaining))


def diff_path(
    route_segments: Sequence[Segment],
    request_segments: Sequence[str],
) -> tuple[SegmentDiff, ...]:
    """Diff a route's path template against the request path segments.

    One entry per route segment, then one ``Unexpected`` per leftover
    request segment unless a trailing multi capture already took them.
    """
    result: list[SegmentDiff] = []
    position = 0
    for segment in route_segments:
        seg_diff = classify_path(segment, request_segments[position:])
        result.append(seg_diff)
        if isinstance(seg_diff, MultiMatch):
            position = len(request_segments)
        elif not isinstance(seg_diff, Missing):
            position += 1

    if not (result and isinstance(result[-1], MultiMatch)):
        result.extend(Unexpected(extra) for extra in request_segments[position:])
    return tuple(result)


# ---------------------------------------------------------------------------
# Query
# ---------------------------------------------------------------------------


def _closest(items: Sequence[QueryItem], literal: str) -> EditScript:
    """Edit script against the item nearest to *literal*; first wins on ties."""
    best: EditScript | None = None
    best_distance = 0
    for item in items:
        script = diff(item.raw, literal)
        if best is None or distance(script) < best_distance:
            best, best_distance = script, distance(script)
    assert best is not None
    return best


def classify_query(
    segment: Segment,
    items: Sequence[QueryItem],
    consumed: set[int],
) -> SegmentDiff:
    """Classify one route query segment against the request query items.

    Items claimed by a static or single segment are added to *consumed*
    so a later multi segment collects only the rest. A static literal with
    no exact match is diffed against the closest unclaimed item, or is
    ``Missing`` when every item is already claimed. *items* must not be
    empty.

    A ``Missing`` for a single capture is a hint, not a verdict: the
    parameter may be optional, which only the router can tell.
    """
    match segment.kind:
        case SegmentKind.STATIC:
            for index, item in enumerate(items):
                if item.raw == segment.value:
                    consumed.add(index)
                    return StaticMatch(item.raw)
            candidates = [item for index, item in enumerate(items) if index not in consumed]
            if not candidates:
                return Missing(segment.value)
            return TextMismatch(_closest(candidates, segment.value))
        case SegmentKind.SINGLE:
            for index, item in enumerate(items):
                if item.key == segment.name:
                    consumed.add(index)
                    return SingleMatch(segment.name, item.raw)
            return Missing(segment.value)
        case SegmentKind.MULTI:
            leftovers = tuple(item.raw for index, item in enumerate(items) if index not in consumed)
            return MultiMatch(segment.name or "", leftovers)


def diff_query(
    route_segments: Sequence[Segment] | None,
    request_items: Sequence[QueryItem] | None,
) -> tuple[SegmentDiff, ...]:
    """Diff a route's query template against the request query items.

    - no template, no items: nothing to report
    - no template: every request item is ``Unexpected``
    - no items: every template segment is ``Missing``
    - otherwise: one entry per template segment. Extra request items are
      not reported, since which item is "extra" is ambiguous once others
      mismatch.
    """
    if route_segments is None:
        return tuple(Unexpected(item.raw) for item in request_items or ())

    if not request_items:
        return tuple(Missing(segment.value) for segment in route_segments)

    # Exact claims first, then static fallbacks (which see only unclaimed
    # items), then multi captures (which collect whatever is left)
    raw = {item.raw for item in request_items}

    def phase(i: int) -> int:
        seg = route_segments[i]
        if seg.kind is SegmentKind.MULTI:
            return 2
        if seg.kind is SegmentKind.STATIC and seg.value not in raw:
            return 1
        return 0

    consumed: set[int] = set()
    order = sorted(range(len(route_segments)), key=phase)
    by_position: dict[int, SegmentDiff] = {}
    for i in order:
        by_position[i] = classify_query(route_segments[i], request_items, consumed)
    return tuple(by_position[i] for i in range(len(route_segments)))
