"""Diff renderer — a ``DiffRecord`` as two aligned lines of spans.

The first line shows what the route expects, the second what the request
has, segment by segment in template order::

    GET: /hello/{name}/mood/{mood}
    GET: /hello/world/mood

Spans carry a ``Highlight`` instead of color codes:

- ``ADDITION`` (route line) — expected by the route, absent from the request
- ``REMOVAL`` (request line) — present in the request, not expected
- ``PLAIN`` — matched text, and all separators

Turning highlights into ANSI or HTML is the caller's concern
(``routehint.server.terminal_hints``, ``routehint.server.hint_page``).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from routehint.hint.diff import ChangedMethod, DiffRecord, MethodDiff, SameMethod
from routehint.hint.media import (
    BothMatch,
    MediaTypeDiff,
    NeitherExpects,
    PartMatch,
    PartMismatch,
    RequestHasButRouteDoesNotExpect,
    RouteExpectsButRequestLacks,
    TrueDynamic,
    TrueStatic,
)
from routehint.hint.segments import (
    Missing,
    MultiMatch,
    SegmentDiff,
    SingleMatch,
    StaticMatch,
    TextMismatch,
    Unexpected,
)
from routehint.hint.textdiff import Add, EditScript, Remove, Same

# Gap between the path/query column and the media type column
MEDIA_GAP = "   "


class Highlight(Enum):
    PLAIN = "plain"
    ADDITION = "addition"
    REMOVAL = "removal"


@dataclass(frozen=True, slots=True)
class Span:
    text: str
    highlight: Highlight = Highlight.PLAIN


@dataclass(frozen=True, slots=True)
class RenderedLine:
    """One rendered line: adjacent spans never share a highlight."""

    spans: tuple[Span, ...]

    def __iter__(self) -> Iterator[Span]:
        return iter(self.spans)

    def __str__(self) -> str:
        return self.text

    @property
    def text(self) -> str:
        """The line without any highlighting."""
        return "".join(span.text for span in self.spans)

    @property
    def has_highlights(self) -> bool:
        return any(span.highlight is not Highlight.PLAIN for span in self.spans)

    @classmethod
    def of(cls, spans: list[Span]) -> RenderedLine:
        """Build a line, dropping empty spans and merging equal neighbours."""
        merged: list[Span] = []
        for span in spans:
            if not span.text:
                continue
            if merged and merged[-1].highlight is span.highlight:
                merged[-1] = Span(merged[-1].text + span.text, span.highlight)
            else:
                merged.append(span)
        return cls(tuple(merged))


# One rendered segment; a request-side multi match yields several
type _Piece = list[Span]


def _script_spans(script: EditScript, *, route_side: bool) -> list[Span]:
    spans: list[Span] = []
    for op in script:
        match op:
            case Same(text=text):
                spans.append(Span(text))
            case Add(text=text) if route_side:
                spans.append(Span(text, Highlight.ADDITION))
            case Remove(text=text) if not route_side:
                spans.append(Span(text, Highlight.REMOVAL))
    return spans


def _route_piece(seg_diff: SegmentDiff) -> _Piece | None:
    match seg_diff:
        case StaticMatch(text=text):
            return [Span(text)]
        case SingleMatch(name=name):
            return [Span(f"{{{name}}}")]
        case MultiMatch(name=name):
            return [Span(f"{{{name}...}}")]
        case TextMismatch(script=script):
            return _script_spans(script, route_side=True)
        case Missing(expected=expected):
            return [Span(expected, Highlight.ADDITION)]
        case Unexpected():
            return None


def _request_pieces(seg_diff: SegmentDiff) -> list[_Piece]:
    match seg_diff:
        case StaticMatch(text=text):
            return [[Span(text)]]
        case SingleMatch(value=value):
            return [[Span(value)]]
        case MultiMatch(values=values):
            return [[Span(value)] for value in values]
        case TextMismatch(script=script):
            return [_script_spans(script, route_side=False)]
        case Missing():
            return []
        case Unexpected(actual=actual):
            return [[Span(actual, Highlight.REMOVAL)]]


def _pieces(diffs: tuple[SegmentDiff, ...], *, route_side: bool) -> list[_Piece]:
    pieces: list[_Piece] = []
    for seg_diff in diffs:
        if route_side:
            piece = _route_piece(seg_diff)
            if piece is not None:
                pieces.append(piece)
        else:
            pieces.extend(_request_pieces(seg_diff))
    return pieces


def _path_spans(pieces: list[_Piece]) -> list[Span]:
    if not pieces:
        return [Span("/")]
    spans: list[Span] = []
    for piece in pieces:
        spans.append(Span("/"))
        spans.extend(piece)
    return spans


def _query_spans(pieces: list[_Piece]) -> list[Span]:
    spans: list[Span] = []
    for index, piece in enumerate(pieces):
        spans.append(Span("?" if index == 0 else "&"))
        spans.extend(piece)
    return spans


def _part_spans(part: PartMatch, *, route_side: bool) -> list[Span]:
    match part:
        case TrueStatic(text=text):
            return [Span(text)]
        case TrueDynamic(route_part=route_part, request_part=request_part):
            return [Span(route_part if route_side else request_part)]
        case PartMismatch(script=script):
            return _script_spans(script, route_side=route_side)


def _media_spans(media_diff: MediaTypeDiff, *, route_side: bool) -> list[Span]:
    match media_diff:
        case BothMatch(top=top, sub=sub):
            spans = [
                *_part_spans(top, route_side=route_side),
                Span("/"),
                *_part_spans(sub, route_side=route_side),
            ]
        case RouteExpectsButRequestLacks(expected=expected):
            spans = [Span(expected, Highlight.ADDITION)] if route_side else []
        case RequestHasButRouteDoesNotExpect(actual=actual):
            spans = [] if route_side else [Span(actual, Highlight.REMOVAL)]
        case NeitherExpects():
            spans = []
    if spans:
        return [Span(MEDIA_GAP), *spans]
    return spans


def _method_span(method_diff: MethodDiff, *, route_side: bool) -> Span:
    match method_diff:
        case SameMethod(method=method):
            return Span(method)
        case ChangedMethod(route_method=route_method, request_method=request_method):
            if route_side:
                return Span(route_method, Highlight.ADDITION)
            return Span(request_method, Highlight.REMOVAL)


def _render_side(record: DiffRecord, *, route_side: bool) -> RenderedLine:
    return RenderedLine.of(
        [
            _method_span(record.method_diff, route_side=route_side),
            Span(": "),
            *_path_spans(_pieces(record.path_diff, route_side=route_side)),
            *_query_spans(_pieces(record.query_diff, route_side=route_side)),
            *_media_spans(record.media_diff, route_side=route_side),
        ]
    )


def render(record: DiffRecord) -> tuple[RenderedLine, RenderedLine]:
    """Render *record* as ``(route_line, request_line)``."""
    return _render_side(record, route_side=True), _render_side(record, route_side=False)
