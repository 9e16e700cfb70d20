"""ASGI handler — translates ASGI scope/messages to routehint types.

The only component that touches raw ASGI directly. Converts scope dicts
to typed Request objects, dispatches through middleware and routing,
and sends Response back through ASGI send().
"""

import inspect
from collections.abc import Callable
from typing import Any

from routehint._internal.asgi import Receive, Scope, Send
from routehint._internal.invoke import invoke
from routehint.errors import HTTPError, PayloadTooLarge
from routehint.http.request import Request
from routehint.http.response import Response
from routehint.middleware.protocol import AnyResponse, Next
from routehint.routing.route import RouteMatch, SegmentKind
from routehint.routing.router import Router
from routehint.server.errors import handle_http_error, handle_internal_error
from routehint.server.negotiation import negotiate
from routehint.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Callable[..., Any], ...],
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
    max_content_length: int | None = None,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        if max_content_length is not None and (request.content_length or 0) > max_content_length:
            raise PayloadTooLarge(max_content_length)

        # Innermost handler: router dispatch
        async def dispatch(req: Request) -> AnyResponse:
            match = router.match(
                req.method,
                req.path,
                query_items=req.query.raw_items(),
                media_type=req.format,
            )
            return await _invoke_handler(match, req)

        # Wrap middleware around the dispatch
        handler = dispatch
        for mw in reversed(middleware):
            outer = handler

            async def make_next(req: Request, _mw: Any = mw, _next: Next = outer) -> Response:
                return await _mw(req, _next)

            handler = make_next

        response = await handler(request)

    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)

    await send_response(response, send, head=request.method == "HEAD")


async def _invoke_handler(match: RouteMatch, request: Request) -> AnyResponse:
    """Call the matched route handler, converting params and return value."""
    handler = match.route.handler
    request = request.with_path_params(match.path_params)
    kwargs = _build_handler_kwargs(handler, request, _captures(match, request))
    result = await invoke(handler, **kwargs)
    return negotiate(result)


def _captures(match: RouteMatch, request: Request) -> dict[str, Any]:
    """Path params plus the values of the route's query captures.

    A single query capture takes the first value of its key; a multi
    query capture receives the raw items no other query segment claimed.
    """
    values: dict[str, Any] = dict(match.path_params)
    segments = match.route.query_segments
    if not segments:
        return values

    items = request.query.raw_items() or ()
    claimed: set[str] = set()
    for seg in segments:
        if seg.kind is SegmentKind.STATIC:
            claimed.add(seg.value)
        elif seg.kind is SegmentKind.SINGLE and seg.name:
            values[seg.name] = request.query.get(seg.name)
            claimed.update(item.raw for item in items if item.key == seg.name)
    for seg in segments:
        if seg.kind is SegmentKind.MULTI and seg.name:
            values[seg.name] = [item.raw for item in items if item.raw not in claimed]
    return values


def _build_handler_kwargs(
    handler: Callable[..., Any],
    request: Request,
    captures: dict[str, Any],
) -> dict[str, Any]:
    """Inspect handler signature and build kwargs from request + captures.

    Resolution order:
    1. ``request`` parameter (by name or ``Request`` annotation)
    2. Captures (by name, with type conversion for strings)
    """
    sig = inspect.signature(handler, eval_str=True)
    kwargs: dict[str, Any] = {}

    for name, param in sig.parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
        elif name in captures:
            value = captures[name]
            annotation = param.annotation
            if isinstance(value, str) and annotation in (int, float):
                try:
                    kwargs[name] = annotation(value)
                except ValueError:
                    kwargs[name] = value
            else:
                kwargs[name] = value

    return kwargs
