"""RouteHint middleware — explain requests that no route accepts.

When the router raises ``NotFound`` or ``MethodNotAllowed``, the
middleware diffs the request against every registered route and writes
the two-line comparisons to the development terminal::

    app.add_middleware(RouteHint())

The original HTTP error is re-raised untouched, so error handlers and
status codes behave exactly as without the middleware. In debug mode
the 404/405 body is replaced by an HTML page carrying the same hints.

A failure while building or writing hints is logged and swallowed; the
request never fails because of its explanation.
"""

import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from routehint.config import HintConfig
from routehint.errors import HTTPError, MethodNotAllowed, NotFound
from routehint.hint.diff import RequestShape
from routehint.hint.registry import HintReport, RegistrySnapshot, on_startup, on_unmatched_request
from routehint.http.request import Request
from routehint.http.response import Response
from routehint.middleware.protocol import AnyResponse, Next
from routehint.routing.route import Route
from routehint.server.terminal_errors import log_error
from routehint.server.terminal_hints import format_report, use_color

logger = logging.getLogger("routehint.hint")


class RouteHint:
    """Middleware that prints route hints for unmatched requests.

    Args:
        config: Output options. Defaults to ``HintConfig()``.
        stream: Where reports are written. Defaults to ``sys.stderr``,
            looked up at write time.
    """

    __slots__ = ("_debug", "_snapshot", "config", "stream")

    def __init__(self, config: HintConfig | None = None, stream: TextIO | None = None) -> None:
        self.config = config or HintConfig()
        self.stream = stream
        self._snapshot: RegistrySnapshot | None = None
        self._debug = False

    @property
    def snapshot(self) -> RegistrySnapshot:
        """The published routes; empty until the app attaches."""
        return self._snapshot or RegistrySnapshot()

    def attach(self, routes: Sequence[Route], *, debug: bool = False) -> None:
        """Receive the compiled routes. Called once when the app freezes."""
        if self._snapshot is not None:
            msg = "RouteHint is already attached to an app."
            raise RuntimeError(msg)
        self._snapshot = on_startup(routes)
        self._debug = debug
        logger.debug("RouteHint attached with %d routes", len(self._snapshot))

    async def __call__(self, request: Request, next: Next) -> AnyResponse:
        # every_request explains up front; the report is reused if routing fails
        report = self._explain(request) if self.config.every_request else None
        try:
            return await next(request)
        except (NotFound, MethodNotAllowed) as exc:
            if not self.config.every_request:
                report = self._explain(request)
            if report is not None and self._debug and self.config.html_page:
                page = self._html_page(report, exc)
                if page is not None:
                    return page
            raise

    def _explain(self, request: Request) -> HintReport | None:
        """Build and write the report. Never raises."""
        try:
            report = on_unmatched_request(self.snapshot, RequestShape.from_request(request))
            self._write(report)
        except Exception as exc:
            log_error(
                exc,
                request,
                prefix=f"Route hints failed for {request.method} {request.path}",
                log=logger,
            )
            return None
        logger.debug("Route hints written for %s %s", request.method, request.path)
        return report

    def _write(self, report: HintReport) -> None:
        stream = self.stream or sys.stderr
        color = self.config.color if self.config.color is not None else use_color(stream)
        stream.write(format_report(report, color=color, show_header=self.config.show_header))
        stream.write("\n")
        stream.flush()

    def _html_page(self, report: HintReport, exc: HTTPError) -> Response | None:
        try:
            from routehint.server.hint_page import render_hint_page

            body = render_hint_page(report, status=exc.status)
        except Exception as render_exc:
            log_error(render_exc, prefix="Route hint page failed to render", log=logger)
            return None
        response = Response(body=body, status=exc.status)
        for name, value in exc.headers:
            response = response.with_header(name, value)
        return response
