"""Route hints — explain why a request matched no route.

For every registered route, the explainer diffs the route against the
request across method, path, query, and media type, and renders the
result as two aligned lines (what the route expects, what the request
has)::

    from routehint.hint import on_startup, on_unmatched_request

    snapshot = on_startup(router.routes)
    report = on_unmatched_request(snapshot, RequestShape.from_request(request))

The explainer never decides whether a request matches; that is the
router's job. It only explains.
"""

from routehint.hint.diff import DiffRecord, RequestShape, build
from routehint.hint.registry import (
    Hint,
    HintReport,
    RegistryBuilder,
    RegistrySnapshot,
    on_startup,
    on_unmatched_request,
)
from routehint.hint.render import Highlight, RenderedLine, Span, render

__all__ = [
    "DiffRecord",
    "Highlight",
    "Hint",
    "HintReport",
    "RegistryBuilder",
    "RegistrySnapshot",
    "RenderedLine",
    "RequestShape",
    "Span",
    "build",
    "on_startup",
    "on_unmatched_request",
    "render",
]
