"""HTML page listing route hints for an unmatched request.

Served as the 404/405 body in debug mode. Each route gets the same two
lines the terminal shows, with additions wrapped in ``<ins>`` and
removals in ``<del>``. Rendered with kida so every piece of request text
is autoescaped.
"""

from dataclasses import dataclass
from functools import cache
from typing import TYPE_CHECKING

from kida import Environment

from routehint.hint.render import Highlight, RenderedLine

if TYPE_CHECKING:
    from routehint.hint.registry import HintReport

_TAGS: dict[Highlight, str] = {
    Highlight.PLAIN: "",
    Highlight.ADDITION: "ins",
    Highlight.REMOVAL: "del",
}

PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{{ status }} {{ method }} {{ target }}</title>
<style>
  body { font-family: ui-monospace, monospace; background: #1a1b26; color: #c0caf5; padding: 1.5em; }
  h1 { font-size: 1.1em; color: #f7768e; }
  .hint { margin: 0 0 1em; }
  .hint pre { margin: 0; }
  ins { color: #9ece6a; text-decoration: none; }
  del { color: #f7768e; text-decoration: none; }
  .empty { color: #565f89; }
</style>
</head>
<body>
<h1>{{ status }}: no route matches {{ method }} {{ target }}</h1>
{% if rows %}
{% for row in rows %}
<div class="hint" data-route="{{ row.route }}">
<pre class="route">{% for piece in row.route_line %}{% if piece.tag %}<{{ piece.tag }}>{{ piece.text }}</{{ piece.tag }}>{% else %}{{ piece.text }}{% end %}{% end %}</pre>
<pre class="request">{% for piece in row.request_line %}{% if piece.tag %}<{{ piece.tag }}>{{ piece.text }}</{{ piece.tag }}>{% else %}{{ piece.text }}{% end %}{% end %}</pre>
</div>
{% end %}
{% else %}
<p class="empty">No routes registered.</p>
{% end %}
</body>
</html>
"""


@dataclass(frozen=True, slots=True)
class _Piece:
    tag: str
    text: str


@dataclass(frozen=True, slots=True)
class _Row:
    route: str
    route_line: tuple[_Piece, ...]
    request_line: tuple[_Piece, ...]


@cache
def _environment() -> Environment:
    return Environment(autoescape=True)


def _pieces(line: RenderedLine) -> tuple[_Piece, ...]:
    return tuple(_Piece(_TAGS[span.highlight], span.text) for span in line)


def render_hint_page(report: HintReport, status: int = 404) -> str:
    """Render *report* as a complete HTML document."""
    rows = [
        _Row(
            route=str(hint.route),
            route_line=_pieces(hint.route_line),
            request_line=_pieces(hint.request_line),
        )
        for hint in report
    ]
    template = _environment().from_string(PAGE_TEMPLATE)
    return template.render(
        {
            "status": status,
            "method": report.method,
            "target": report.target,
            "rows": rows,
        }
    )
