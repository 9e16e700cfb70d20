"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

No base class required. The pipeline checks the shape, not the lineage.
Middleware that also defines ``attach(routes, *, debug)`` is handed the compiled
route list once, when the app freezes.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol, runtime_checkable

from routehint.http.request import Request
from routehint.http.response import Response
from routehint.routing.route import Route

# Any response type the pipeline can produce
type AnyResponse = Response

# The next handler in the middleware chain
type Next = Callable[[Request], Awaitable[AnyResponse]]


class Middleware(Protocol):
    """Protocol for routehint middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(request: Request, next: Next) -> AnyResponse:
            start = time.monotonic()
            response = await next(request)
            elapsed = time.monotonic() - start
            return response.with_header("X-Time", f"{elapsed:.3f}")

        # Class middleware
        class RateLimiter:
            async def __call__(self, request: Request, next: Next) -> AnyResponse:
                ...
    """

    async def __call__(self, request: Request, next: Next) -> AnyResponse: ...


@runtime_checkable
class RouteAware(Protocol):
    """Middleware that wants to see the compiled routes."""

    def attach(self, routes: Sequence[Route], *, debug: bool = False) -> None: ...
